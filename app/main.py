# app/main.py
import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import Depends, FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .catalog import CatalogStore
from .config import Settings, get_settings
from .core import ProductIn, ProductUpdate, CategoryIn, CategoryUpdate
from .database import JSONStorage
from .exceptions import CatalogError
from .models import Category, Product

settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    current = app.dependency_overrides.get(get_settings, get_settings)()
    if current.create_data_file:
        JSONStorage(current.data_file).initialize()
    logger.info("Server is running on http://%s:%s", current.host, current.port)
    yield


app = FastAPI(title="catalog-store", docs_url="/api-docs", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------
# Error responses
# ---------------------------
@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"message": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )

# ---------------------------
# Dependencies
# ---------------------------
def get_store(settings: Settings = Depends(get_settings)) -> CatalogStore:
    return CatalogStore(JSONStorage(settings.data_file))

@app.get("/")
async def health():
    return {"status": "ok"}

# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/products", response_model=List[Product])
async def list_products(store: CatalogStore = Depends(get_store)):
    return await store.list_products()

@app.post("/products", response_model=Product, status_code=201)
async def create_product(payload: ProductIn, store: CatalogStore = Depends(get_store)):
    return await store.create_product(payload)

@app.put("/products/{product_id}", response_model=Product)
async def update_product(product_id: int, payload: ProductUpdate, store: CatalogStore = Depends(get_store)):
    return await store.update_product(product_id, payload)

@app.delete("/products/{product_id}", status_code=204)
async def delete_product(product_id: int, store: CatalogStore = Depends(get_store)):
    await store.delete_product(product_id)
    return Response(status_code=204)

# ---------------------------
# Category endpoints
# ---------------------------
@app.get("/categories", response_model=List[Category])
async def list_categories(store: CatalogStore = Depends(get_store)):
    return await store.list_categories()

@app.post("/categories", response_model=Category, status_code=201)
async def create_category(payload: CategoryIn, store: CatalogStore = Depends(get_store)):
    return await store.create_category(payload)

@app.put("/categories/{category_id}", response_model=Category)
async def update_category(category_id: int, payload: CategoryUpdate, store: CatalogStore = Depends(get_store)):
    return await store.update_category(category_id, payload)

@app.delete("/categories/{category_id}", status_code=204)
async def delete_category(category_id: int, store: CatalogStore = Depends(get_store)):
    # also detaches the id from every product
    await store.delete_category(category_id)
    return Response(status_code=204)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
