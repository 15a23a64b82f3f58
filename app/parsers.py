"""
Line parsers for the seller, product and sale text formats.

Every parser takes one line of text and returns a record, or ``None`` when
the line does not carry enough fields and should be skipped. Numeric fields
that are present but unparseable raise :class:`FormatError`.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional

from app.errors import FormatError
from app.models import Product, SaleLine, Seller, SellerKey

FIELD_SEPARATOR = ":"
SALE_TERMINATOR = ";"


def split_fields(line: str) -> list[str]:
    # trailing empty fields do not count towards the field total
    fields = line.rstrip("\r\n").split(FIELD_SEPARATOR)
    while fields and fields[-1] == "":
        fields.pop()
    return fields


def parse_decimal(raw: str) -> Decimal:
    """Parse a price that may use ``,`` or ``.`` as the decimal separator."""
    text = raw.strip().replace(",", ".")
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise FormatError(f"Invalid price {raw!r}") from None
    if not value.is_finite() or value < 0:
        raise FormatError(f"Invalid price {raw!r}")
    return value


def parse_quantity(raw: str) -> int:
    text = raw.strip()
    if not text.isdecimal():
        raise FormatError(f"Invalid quantity {raw!r}")
    return int(text)


def parse_seller_line(line: str) -> Optional[Seller]:
    fields = split_fields(line)
    if len(fields) < 4:
        return None
    return Seller(
        document_type=fields[0],
        document_number=fields[1],
        name=fields[2],
        last_name=fields[3],
    )


def parse_product_line(line: str) -> Optional[Product]:
    fields = split_fields(line)
    if len(fields) < 3:
        return None
    return Product(id=fields[0], name=fields[1], price=parse_decimal(fields[2]))


def parse_sale_line(line: str) -> Optional[SaleLine]:
    text = line.rstrip("\r\n")
    if text.endswith(SALE_TERMINATOR):
        text = text[:-1]
    fields = split_fields(text)
    if len(fields) < 2:
        return None
    return SaleLine(product_id=fields[0], quantity=parse_quantity(fields[1]))


def parse_seller_key(line: str) -> Optional[SellerKey]:
    """Parse the ``TYPE:NUMBER`` header of a sale source."""
    fields = line.rstrip("\r\n").split(FIELD_SEPARATOR)
    if len(fields) != 2:
        return None
    return SellerKey(document_type=fields[0], document_number=fields[1])
