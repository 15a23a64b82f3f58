from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import PlainTextResponse

from app.config import Settings
from app.engine import load_products, load_sellers
from app.errors import NotFoundError, SalesDataError
from app.logging_config import configure_logging
from app.pipeline import run_pipeline


@lru_cache
def get_settings() -> Settings:
    return Settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(get_settings().log_level)
    yield


app = FastAPI(
    title="Sales Report Service",
    version="1.0.0",
    description="Seller and product sales reports built from flat text sources",
    lifespan=lifespan,
)


# ── Sources ──────────────────────────────────────────────────────────────────

@app.get("/api/v1/sellers", summary="List sellers from the seller source")
def list_sellers(settings: Settings = Depends(get_settings)):
    try:
        sellers = load_sellers(settings.sellers_path)
    except NotFoundError as exc:
        raise HTTPException(404, str(exc))
    except SalesDataError as exc:
        raise HTTPException(422, str(exc))
    return {"sellers": [s.model_dump() for s in sellers.values()]}


@app.get("/api/v1/products", summary="List products from the product source")
def list_products(settings: Settings = Depends(get_settings)):
    try:
        products = load_products(settings.products_path)
    except NotFoundError as exc:
        raise HTTPException(404, str(exc))
    except SalesDataError as exc:
        raise HTTPException(422, str(exc))
    return {"products": [p.model_dump(mode="json") for p in products.values()]}


# ── Reports ──────────────────────────────────────────────────────────────────

@app.post("/api/v1/reports", summary="Run the pipeline and write both reports")
def create_reports(settings: Settings = Depends(get_settings)):
    try:
        result = run_pipeline(settings)
    except NotFoundError as exc:
        raise HTTPException(404, str(exc))
    except SalesDataError as exc:
        raise HTTPException(422, str(exc))
    return result.model_dump()


def _report_response(path) -> PlainTextResponse:
    if not path.is_file():
        raise HTTPException(404, f"Report '{path.name}' has not been generated")
    return PlainTextResponse(path.read_text(encoding="utf-8"), media_type="text/csv")


@app.get("/api/v1/reports/sellers", summary="Download the seller report")
def get_seller_report(settings: Settings = Depends(get_settings)):
    return _report_response(settings.seller_report_path)


@app.get("/api/v1/reports/products", summary="Download the product report")
def get_product_report(settings: Settings = Depends(get_settings)):
    return _report_response(settings.product_report_path)


# ── Admin ─────────────────────────────────────────────────────────────────────

@app.post("/api/v1/admin/generate", summary="Regenerate synthetic test data")
def regenerate(
    sellers: int = Query(default=5, ge=1),
    products: int = Query(default=10, ge=1),
    seed: Optional[int] = Query(default=None),
    settings: Settings = Depends(get_settings),
):
    from scripts.generate_data import generate
    seller_keys = generate(
        settings, sellers_count=sellers, products_count=products, seed=seed, clean=True
    )
    return {
        "status": "generated",
        "data_dir": str(settings.data_dir),
        "sellers": len(seller_keys),
        "products": products,
    }
