# sdk/pycatalog.py
import requests
import httpx
from typing import Any, Dict, List, Optional


class CatalogAPIError(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


def _error_message(r) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.text
    if isinstance(body, dict) and "message" in body:
        return body["message"]
    return str(body)


class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:3000", timeout: int = 10, session: Any = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # anything with requests' get/post/put/delete signature works here
        self.session = session if session is not None else requests.Session()
        self.transport = transport

    def _check(self, r):
        if r.status_code >= 400:
            raise CatalogAPIError(r.status_code, _error_message(r))
        if r.status_code == 204:
            return None
        return r.json()

    # Products
    def list_products(self) -> List[Dict[str, Any]]:
        r = self.session.get(f"{self.base_url}/products", timeout=self.timeout)
        return self._check(r)

    def create_product(self, name: str, price: float, description: str, categories: Optional[List[int]] = None):
        r = self.session.post(f"{self.base_url}/products", json={
            "name": name, "price": price, "description": description, "categories": categories or []
        }, timeout=self.timeout)
        return self._check(r)

    def update_product(self, product_id: int, **fields):
        # only the fields given are sent, the rest stay as stored
        payload = {k: v for k, v in fields.items() if v is not None}
        r = self.session.put(f"{self.base_url}/products/{product_id}", json=payload, timeout=self.timeout)
        return self._check(r)

    def delete_product(self, product_id: int) -> None:
        r = self.session.delete(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        self._check(r)

    # Categories
    def list_categories(self) -> List[Dict[str, Any]]:
        r = self.session.get(f"{self.base_url}/categories", timeout=self.timeout)
        return self._check(r)

    def create_category(self, name: str):
        r = self.session.post(f"{self.base_url}/categories", json={"name": name}, timeout=self.timeout)
        return self._check(r)

    def update_category(self, category_id: int, name: Optional[str] = None):
        payload = {"name": name} if name is not None else {}
        r = self.session.put(f"{self.base_url}/categories/{category_id}", json=payload, timeout=self.timeout)
        return self._check(r)

    def delete_category(self, category_id: int) -> None:
        r = self.session.delete(f"{self.base_url}/categories/{category_id}", timeout=self.timeout)
        self._check(r)

    # Async variants, one httpx client per call
    async def create_product_async(self, name: str, price: float, description: str, categories: Optional[List[int]] = None):
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            r = await client.post(f"{self.base_url}/products", json={
                "name": name, "price": price, "description": description, "categories": categories or []
            })
            return self._check(r)

    async def create_category_async(self, name: str):
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            r = await client.post(f"{self.base_url}/categories", json={"name": name})
            return self._check(r)


if __name__ == "__main__":
    import argparse
    from rich import print

    parser = argparse.ArgumentParser(description="PyCatalog CLI")
    parser.add_argument("--base-url", default="http://127.0.0.1:3000", help="Catalog server URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---------------------------
    # Product commands
    # ---------------------------
    subparsers.add_parser("list-products", help="List all products")

    cp = subparsers.add_parser("create-product", help="Create a product")
    cp.add_argument("--name", required=True, help="Product name")
    cp.add_argument("--price", type=float, required=True, help="Price")
    cp.add_argument("--description", default="", help="Description")
    cp.add_argument("--categories", type=int, nargs="*", default=[], help="Category ids")

    up = subparsers.add_parser("update-product", help="Update some fields of a product")
    up.add_argument("--id", type=int, required=True, help="Product id")
    up.add_argument("--name", help="New name")
    up.add_argument("--price", type=float, help="New price")
    up.add_argument("--description", help="New description")
    up.add_argument("--categories", type=int, nargs="*", help="New category ids")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--id", type=int, required=True, help="Product id")

    # ---------------------------
    # Category commands
    # ---------------------------
    subparsers.add_parser("list-categories", help="List all categories")

    cc = subparsers.add_parser("create-category", help="Create a category")
    cc.add_argument("--name", required=True, help="Category name")

    uc = subparsers.add_parser("update-category", help="Rename a category")
    uc.add_argument("--id", type=int, required=True, help="Category id")
    uc.add_argument("--name", help="New name")

    dc = subparsers.add_parser("delete-category", help="Delete a category and detach it from products")
    dc.add_argument("--id", type=int, required=True, help="Category id")

    args = parser.parse_args()
    c = CatalogClient(base_url=args.base_url)

    try:
        if args.command == "list-products":
            print(c.list_products())
        elif args.command == "create-product":
            print(c.create_product(args.name, args.price, args.description, args.categories))
        elif args.command == "update-product":
            print(c.update_product(args.id, name=args.name, price=args.price,
                                   description=args.description, categories=args.categories))
        elif args.command == "delete-product":
            c.delete_product(args.id)
            print(f"[green]Product {args.id} deleted[/green]")
        elif args.command == "list-categories":
            print(c.list_categories())
        elif args.command == "create-category":
            print(c.create_category(args.name))
        elif args.command == "update-category":
            print(c.update_category(args.id, args.name))
        elif args.command == "delete-category":
            c.delete_category(args.id)
            print(f"[green]Category {args.id} deleted[/green]")
    except CatalogAPIError as e:
        print(f"[red]{e}[/red]")
        raise SystemExit(1)
