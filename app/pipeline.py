import logging

from app.config import Settings
from app.engine import (
    build_product_report,
    build_seller_report,
    discover_sale_sources,
    load_products,
    load_sellers,
    process_sale_sources,
)
from app.models import PipelineResult
from app.reports import (
    PRODUCT_REPORT_HEADER,
    SELLER_REPORT_HEADER,
    product_report_lines,
    seller_report_lines,
    write_report,
)

logger = logging.getLogger(__name__)


def run_pipeline(settings: Settings) -> PipelineResult:
    """
    Load sellers and products, aggregate every sale source and write both
    reports.

    Loading errors (``NotFoundError``, ``FormatError``, ``SourceReadError``)
    propagate before any report file is touched. Both reports are formatted
    in full before either file is replaced.
    """
    settings.output_dir.mkdir(parents=True, exist_ok=True)

    sellers = load_sellers(settings.sellers_path)
    products = load_products(settings.products_path)

    excluded = [settings.sellers_file, settings.products_file]
    if settings.reports_share_data_dir:
        excluded += [settings.seller_report_file, settings.product_report_file]
    sources = discover_sale_sources(settings.data_dir, exclude=excluded)
    if not sources:
        logger.warning("No sale sources found in %s", settings.data_dir)

    store = process_sale_sources(sources, sellers, products, strict=settings.strict)

    seller_lines = seller_report_lines(build_seller_report(store))
    product_lines = product_report_lines(build_product_report(store))
    write_report(settings.seller_report_path, SELLER_REPORT_HEADER, seller_lines)
    write_report(settings.product_report_path, PRODUCT_REPORT_HEADER, product_lines)

    return PipelineResult(
        seller_report=str(settings.seller_report_path),
        product_report=str(settings.product_report_path),
        sellers_loaded=len(store.sellers),
        products_loaded=len(store.products),
        sources_processed=len(store.processed_sources),
        sources_skipped=len(store.skipped_sources),
    )
