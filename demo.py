#!/usr/bin/env python
from sdk.pycatalog import CatalogClient, CatalogAPIError

def main():
    c = CatalogClient(base_url="http://127.0.0.1:3000")

    # -----------------------------
    # Categories
    # -----------------------------
    print("Creating category...")
    books = c.create_category("Books")
    print(books)

    # -----------------------------
    # Product referencing it
    # -----------------------------
    print("\nCreating product in 'Books'...")
    pen = c.create_product("Pen", 1.5, "x", [books["id"]])
    print(pen)

    print("\nCreating product with an unknown category...")
    try:
        c.create_product("Ghost", 1, "never stored", [999])
    except CatalogAPIError as e:
        print(e)

    # -----------------------------
    # Partial update
    # -----------------------------
    print("\nChanging only the price...")
    print(c.update_product(pen["id"], price=2.0))

    # -----------------------------
    # Cascade delete
    # -----------------------------
    print(f"\nDeleting category {books['id']}...")
    c.delete_category(books["id"])
    print("\nProducts after delete:")
    print(c.list_products())
    print("\nCategories after delete:")
    print(c.list_categories())

if __name__ == "__main__":
    main()
