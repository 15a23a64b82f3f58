import logging
from decimal import Decimal, localcontext
from pathlib import Path
from typing import Iterable, Iterator, Optional

from app.errors import CrossReferenceError, FormatError, NotFoundError, SourceReadError
from app.models import (
    EXACT,
    Product,
    ProductReportRow,
    Sale,
    Seller,
    SellerKey,
    SellerReportRow,
)
from app.parsers import (
    parse_product_line,
    parse_sale_line,
    parse_seller_key,
    parse_seller_line,
)
from app.store import SalesStore

logger = logging.getLogger(__name__)

_ZERO = Decimal("0.00")


# ── Loading ──────────────────────────────────────────────────────────────────

def _source_lines(path: Path) -> Iterator[tuple[int, str]]:
    """Yield numbered lines of a required source, raising only ``SalesDataError``."""
    if not path.is_file():
        raise NotFoundError(path)

    try:
        with path.open(encoding="utf-8") as fh:
            for line_number, line in enumerate(fh, start=1):
                yield line_number, line
    except UnicodeDecodeError as exc:
        raise SourceReadError(path, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise SourceReadError(path, str(exc)) from exc


def load_sellers(path: Path) -> dict[SellerKey, Seller]:
    path = Path(path)
    sellers: dict[SellerKey, Seller] = {}
    for line_number, line in _source_lines(path):
        seller = parse_seller_line(line)
        if seller is None:
            logger.debug("Skipping seller line %s:%d", path.name, line_number)
            continue
        if seller.key in sellers:
            logger.warning(
                "Duplicate seller %s at %s:%d replaces earlier entry",
                seller.key, path.name, line_number,
            )
        sellers[seller.key] = seller

    logger.info("Sellers loaded: %d", len(sellers))
    return sellers


def load_products(path: Path) -> dict[str, Product]:
    path = Path(path)
    products: dict[str, Product] = {}
    for line_number, line in _source_lines(path):
        try:
            product = parse_product_line(line)
        except FormatError as exc:
            raise FormatError(str(exc), source=path, line_number=line_number) from exc
        if product is None:
            logger.debug("Skipping product line %s:%d", path.name, line_number)
            continue
        if product.id in products:
            logger.warning(
                "Duplicate product %s at %s:%d replaces earlier entry",
                product.id, path.name, line_number,
            )
        products[product.id] = product

    logger.info("Products loaded: %d", len(products))
    return products


# ── Sale sources ─────────────────────────────────────────────────────────────

def discover_sale_sources(data_dir: Path, exclude: Iterable[str]) -> list[Path]:
    """Every regular file in ``data_dir`` except the excluded names, by name."""
    excluded = set(exclude)
    return sorted(
        (p for p in Path(data_dir).iterdir() if p.is_file() and p.name not in excluded),
        key=lambda p: p.name,
    )


def _read_sale_source(
    path: Path, store: SalesStore, strict: bool
) -> Optional[tuple[SellerKey, list[Sale]]]:
    """Read one source fully and return its seller and the sales to record."""
    with path.open(encoding="utf-8") as fh:
        header = fh.readline()
        if header == "":
            logger.warning("Empty sale source: %s", path.name)
            return None

        seller_key = parse_seller_key(header)
        if seller_key is None or store.get_seller(seller_key) is None:
            claimed = header.rstrip("\r\n")
            if strict:
                raise CrossReferenceError(f"Unknown seller {claimed!r} in {path}")
            logger.warning("Seller not found: %s in source %s", claimed, path.name)
            return None

        staged: list[Sale] = []
        for line_number, line in enumerate(fh, start=2):
            try:
                sale_line = parse_sale_line(line)
            except FormatError as exc:
                raise FormatError(str(exc), source=path, line_number=line_number) from exc
            if sale_line is None:
                continue
            if sale_line.quantity == 0:
                logger.debug("Skipping zero quantity at %s:%d", path.name, line_number)
                continue

            product = store.get_product(sale_line.product_id)
            if product is None:
                if strict:
                    raise CrossReferenceError(
                        f"Unknown product {sale_line.product_id!r} at {path}:{line_number}"
                    )
                logger.warning(
                    "Product not found: %s in source %s", sale_line.product_id, path.name
                )
                continue
            staged.append(Sale(product=product, quantity=sale_line.quantity))

    return seller_key, staged


def process_sale_sources(
    sources: Iterable[Path],
    sellers: dict[SellerKey, Seller],
    products: dict[str, Product],
    strict: bool = False,
) -> SalesStore:
    """
    Aggregate every sale source into a new store.

    A source is read completely before any of its sales are recorded, so a
    source that fails part way contributes nothing. Failures are logged and
    the next source is processed, unless ``strict`` is set.
    """
    store = SalesStore()
    for seller in sellers.values():
        store.add_seller(seller)
    for product in products.values():
        store.add_product(product)

    for path in sources:
        path = Path(path)
        try:
            outcome = _read_sale_source(path, store, strict)
        except (OSError, UnicodeDecodeError, FormatError) as exc:
            if strict:
                raise
            logger.error("Error processing sale source %s: %s", path.name, exc)
            outcome = None

        if outcome is None:
            store.skipped_sources.append(path)
            continue

        seller_key, sales = outcome
        for sale in sales:
            store.record_sale(seller_key, sale)
        store.processed_sources.append(path)

    logger.info(
        "Sale sources processed: %d (skipped %d)",
        len(store.processed_sources), len(store.skipped_sources),
    )
    return store


# ── Report rows ──────────────────────────────────────────────────────────────

def seller_total(sales: Iterable[Sale]) -> Decimal:
    with localcontext(EXACT):
        return sum((sale.amount for sale in sales), _ZERO)


def build_seller_report(store: SalesStore) -> list[SellerReportRow]:
    rows = [
        SellerReportRow(
            document_type=seller.document_type,
            document_number=seller.document_number,
            name=seller.name,
            last_name=seller.last_name,
            total_sold=seller_total(store.get_sales_for_seller(key)),
        )
        for key, seller in store.sellers.items()
    ]
    # sorted() is stable: ties keep seller load order
    return sorted(rows, key=lambda r: r.total_sold, reverse=True)


def build_product_report(store: SalesStore) -> list[ProductReportRow]:
    rows = [
        ProductReportRow(
            id=product.id,
            name=product.name,
            price=product.price,
            quantity_sold=store.totals_by_product.get(product_id, 0),
        )
        for product_id, product in store.products.items()
    ]
    return sorted(rows, key=lambda r: r.quantity_sold, reverse=True)
