# cli.py
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.pycatalog import CatalogClient

console = Console()
c = CatalogClient(base_url=os.environ.get("CATALOG_URL", "http://127.0.0.1:3000"))


# Global state for status messages and caching
status_message = "Ready"
category_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def _category_names(ids: List[int]) -> str:
    names = {cat["id"]: cat["name"] for cat in category_cache}
    return ", ".join(f"{names.get(cid, '?')} ({cid})" for cid in ids) or "-"


def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Description", width=30)
    table.add_column("Categories", width=30)

    for p in products:
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            f"{p.get('price', 0):.2f}",
            p.get("description", ""),
            _category_names(p.get("categories", []))
        )
    console.print(table)


def show_categories(categories: List[Dict[str, Any]]):
    if not categories:
        console.print("[italic yellow]No categories found[/italic yellow]")
        return

    table = Table(title="🏷️ Categories", box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("ID", style="dim", width=6)
    table.add_column("Name", style="bold", width=30)
    for cat in categories:
        table.add_row(str(cat.get("id", "N/A")), cat.get("name", "N/A"))
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    On failure prints the error and returns None; the status line keeps the last outcome.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


def refresh_categories():
    global category_cache
    category_cache = try_api(c.list_categories) or []


def get_category_completer():
    return WordCompleter([str(cat["id"]) for cat in category_cache], ignore_case=True)


# ---------------------------
# Input helpers
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: Optional[float] = 10.0) -> Optional[float]:
    # an empty answer means "no value" when there is no default
    while True:
        raw = Prompt.ask(message, default="" if default is None else str(default))
        if raw == "" and default is None:
            return None
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_category_ids(message: str, allow_skip: bool = False) -> Optional[List[int]]:
    raw = prompt_with_autocomplete(f"{message} (space separated ids)", completer=get_category_completer()).strip()
    if not raw and allow_skip:
        return None
    try:
        return [int(part) for part in raw.replace(",", " ").split()]
    except ValueError:
        console.print("[red]Category ids must be integers.[/red]")
        return ask_category_ids(message, allow_skip)


def ask_category_id() -> int:
    while True:
        raw = prompt_with_autocomplete("Category id", completer=get_category_completer()).strip()
        if raw.isdigit():
            return int(raw)
        console.print("[red]Please enter a numeric id.[/red]")


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ PyCatalog SDK",
        "[bold blue]Catalog admin CLI[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
def menu():
    console.clear()
    console.print(create_header())
    refresh_categories()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "🏷️ List categories"),
            ("2", "➕ Create product", "6", "➕ Create category"),
            ("3", "✏️ Update product", "7", "✏️ Rename category"),
            ("4", "➖ Delete product", "8", "➖ Delete category"),
            ("", "", "q", "👋 Quit")
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 9)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            refresh_categories()
            products = try_api(c.list_products, success_msg="Products loaded")
            if products is not None:
                show_products(products)

        elif choice == "2":
            name = prompt_with_autocomplete("Product name")
            price = ask_float("💰 Price", default=10.0)
            description = prompt_with_autocomplete("Description")
            ids = ask_category_ids("🏷️ Categories")
            resp = try_api(c.create_product, name, price, description, ids,
                           success_msg=f"Product '{name}' created")
            if resp:
                show_products([resp])

        elif choice == "3":
            pid = IntPrompt.ask("Product id")
            console.print("[dim]Leave a field empty to keep its current value[/dim]")
            name = prompt_with_autocomplete("New name") or None
            price = ask_float("New price", default=None)
            description = prompt_with_autocomplete("New description") or None
            ids = ask_category_ids("New categories", allow_skip=True)
            resp = try_api(c.update_product, pid, name=name, price=price,
                           description=description, categories=ids,
                           success_msg=f"Product {pid} updated")
            if resp:
                show_products([resp])

        elif choice == "4":
            pid = IntPrompt.ask("Product id")
            if Confirm.ask(f"Delete product {pid}?"):
                try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")

        elif choice == "5":
            categories = try_api(c.list_categories, success_msg="Categories loaded")
            if categories is not None:
                show_categories(categories)

        elif choice == "6":
            name = prompt_with_autocomplete("Category name")
            resp = try_api(c.create_category, name, success_msg=f"Category '{name}' created")
            if resp:
                refresh_categories()
                show_categories([resp])

        elif choice == "7":
            cid = ask_category_id()
            name = prompt_with_autocomplete("New name")
            resp = try_api(c.update_category, cid, name or None, success_msg=f"Category {cid} updated")
            if resp:
                refresh_categories()
                show_categories([resp])

        elif choice == "8":
            cid = ask_category_id()
            if Confirm.ask(f"[red]Delete category {cid} and remove it from every product?[/red]"):
                try_api(c.delete_category, cid, success_msg=f"Category {cid} deleted")
                refresh_categories()

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)
