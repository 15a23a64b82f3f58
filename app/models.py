from pydantic import BaseModel, ConfigDict, Field
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal, localcontext

# arithmetic on money never rounds, whatever the magnitude
EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


class SellerKey(BaseModel):
    """Seller identity: document type plus document number."""

    model_config = ConfigDict(frozen=True)

    document_type: str
    document_number: str

    def __str__(self) -> str:
        return f"{self.document_type}:{self.document_number}"


class Seller(BaseModel):
    model_config = ConfigDict(frozen=True)

    document_type: str
    document_number: str
    name: str
    last_name: str

    @property
    def key(self) -> SellerKey:
        return SellerKey(
            document_type=self.document_type,
            document_number=self.document_number,
        )


class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: Decimal = Field(ge=0)


class SaleLine(BaseModel):
    """One parsed line of a sale source, before the product is resolved."""

    model_config = ConfigDict(frozen=True)

    product_id: str
    quantity: int = Field(ge=0)


class Sale(BaseModel):
    model_config = ConfigDict(frozen=True)

    product: Product
    quantity: int = Field(gt=0)

    @property
    def amount(self) -> Decimal:
        with localcontext(EXACT):
            return self.product.price * self.quantity


# ── Report rows ──────────────────────────────────────────────────────────────

class SellerReportRow(BaseModel):
    document_type: str
    document_number: str
    name: str
    last_name: str
    total_sold: Decimal


class ProductReportRow(BaseModel):
    id: str
    name: str
    price: Decimal
    quantity_sold: int


class PipelineResult(BaseModel):
    seller_report: str
    product_report: str
    sellers_loaded: int
    products_loaded: int
    sources_processed: int
    sources_skipped: int
