from pathlib import Path
from typing import Optional

from app.models import Product, Sale, Seller, SellerKey


class SalesStore:
    """Sellers, products and the totals accumulated from sale sources."""

    def __init__(self) -> None:
        self.sellers: dict[SellerKey, Seller] = {}
        self.products: dict[str, Product] = {}
        self.sales_by_seller: dict[SellerKey, list[Sale]] = {}
        self.totals_by_product: dict[str, int] = {}
        self.processed_sources: list[Path] = []
        self.skipped_sources: list[Path] = []

    # ── writes ────────────────────────────────────────────────────────────────

    def add_seller(self, seller: Seller) -> None:
        key = seller.key
        self.sellers[key] = seller
        self.sales_by_seller.setdefault(key, [])

    def add_product(self, product: Product) -> None:
        self.products[product.id] = product
        self.totals_by_product.setdefault(product.id, 0)

    def record_sale(self, seller_key: SellerKey, sale: Sale) -> None:
        self.sales_by_seller[seller_key].append(sale)
        self.totals_by_product[sale.product.id] += sale.quantity

    # ── reads ─────────────────────────────────────────────────────────────────

    def get_seller(self, key: SellerKey) -> Optional[Seller]:
        return self.sellers.get(key)

    def get_product(self, product_id: str) -> Optional[Product]:
        return self.products.get(product_id)

    def get_sales_for_seller(self, key: SellerKey) -> list[Sale]:
        return self.sales_by_seller.get(key, [])
