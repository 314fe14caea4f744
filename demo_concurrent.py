import asyncio
from sdk.pycatalog import CatalogClient, CatalogAPIError

async def create(client, name):
    try:
        cat = await client.create_category_async(name)
        print(f"✅ created {cat['name']} with id {cat['id']}")
        return cat
    except CatalogAPIError as e:
        print(f"❌ {name} failed: {e}")
    except Exception as e:
        print(f"❌ {name} unexpected failure: {e}")

async def main():
    c = CatalogClient(base_url="http://127.0.0.1:3000")
    before = len(c.list_categories())

    names = [f"Concurrent {i}" for i in range(10)]
    print("\n⚡ Creating categories concurrently...")
    results = await asyncio.gather(*(create(c, n) for n in names))

    created = [r for r in results if r]
    after = c.list_categories()
    ids = [cat["id"] for cat in after]

    print(f"\n📦 {len(created)} created, {len(after) - before} new in the data file")
    print("🔑 ids unique:", len(ids) == len(set(ids)))

if __name__ == "__main__":
    asyncio.run(main())
