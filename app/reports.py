import csv
import logging
import os
import tempfile
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from pathlib import Path
from typing import Iterable

from app.errors import FormatError
from app.models import EXACT, ProductReportRow, SellerReportRow

logger = logging.getLogger(__name__)

SELLER_REPORT_HEADER = ["Tipo Documento", "Número Documento", "Nombre", "Apellido", "Total Vendido"]
PRODUCT_REPORT_HEADER = ["ID", "Nombre", "Precio", "Cantidad Vendida"]

_TWO_DP = Decimal("0.01")


def format_amount(amount: Decimal) -> str:
    """Two decimal digits with ``,`` as the decimal separator, e.g. ``1250,50``."""
    if not amount.is_finite():
        raise FormatError(f"Cannot format amount {amount!r}")
    try:
        with localcontext(EXACT):
            rounded = amount.quantize(_TWO_DP, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise FormatError(f"Cannot format amount {amount!r}") from None
    return f"{rounded:f}".replace(".", ",")


def write_report(path: Path, header: list[str], rows: list[list[str]]) -> None:
    """Replace ``path`` in one step, so readers never see a partial report."""
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        # newline="" lets the csv module control line endings
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            writer = csv.writer(fh, lineterminator="\n")
            writer.writerow(header)
            writer.writerows(rows)
        os.replace(tmp_name, path)
    except BaseException:
        os.unlink(tmp_name)
        raise
    logger.info("Report written: %s", path)


def seller_report_lines(rows: Iterable[SellerReportRow]) -> list[list[str]]:
    return [
        [r.document_type, r.document_number, r.name, r.last_name, format_amount(r.total_sold)]
        for r in rows
    ]


def product_report_lines(rows: Iterable[ProductReportRow]) -> list[list[str]]:
    return [[r.id, r.name, format_amount(r.price), str(r.quantity_sold)] for r in rows]
