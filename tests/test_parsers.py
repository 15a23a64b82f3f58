from decimal import Decimal

import pytest

from app.errors import FormatError
from app.models import SellerKey
from app.parsers import (
    parse_decimal,
    parse_product_line,
    parse_sale_line,
    parse_seller_key,
    parse_seller_line,
)


class TestSellerLine:
    def test_four_fields(self):
        seller = parse_seller_line("CC:12345678:Ana:Díaz\n")
        assert seller.document_type == "CC"
        assert seller.document_number == "12345678"
        assert seller.name == "Ana"
        assert seller.last_name == "Díaz"

    def test_extra_fields_ignored(self):
        assert parse_seller_line("CC:1:Ana:Díaz:extra").last_name == "Díaz"

    @pytest.mark.parametrize("line", ["", "CC:1:Ana", "CC:1:Ana:", "CC:1::\r\n"])
    def test_too_few_fields_returns_none(self, line):
        assert parse_seller_line(line) is None


class TestProductLine:
    def test_comma_decimal(self):
        product = parse_product_line("P001:Laptop 1:123456,78")
        assert product.id == "P001"
        assert product.name == "Laptop 1"
        assert product.price == Decimal("123456.78")

    def test_too_few_fields_returns_none(self):
        assert parse_product_line("P001:Laptop 1") is None

    @pytest.mark.parametrize("raw", ["abc", "1,2,3", "-5", "NaN", "Infinity"])
    def test_invalid_price_raises(self, raw):
        with pytest.raises(FormatError):
            parse_product_line(f"P001:Laptop 1:{raw}")

    def test_whitespace_around_price(self):
        assert parse_decimal(" 10,5 ") == Decimal("10.5")


class TestSaleLine:
    def test_trailing_semicolon_stripped(self):
        sale = parse_sale_line("P001:3;\n")
        assert sale.product_id == "P001"
        assert sale.quantity == 3

    def test_without_semicolon(self):
        assert parse_sale_line("P002:10").quantity == 10

    @pytest.mark.parametrize("line", ["", ";", "P001", "P001:;"])
    def test_too_few_fields_returns_none(self, line):
        assert parse_sale_line(line) is None

    @pytest.mark.parametrize("raw", ["-1", "2.5", "ten"])
    def test_invalid_quantity_raises(self, raw):
        with pytest.raises(FormatError):
            parse_sale_line(f"P001:{raw};")


class TestSellerKey:
    def test_header(self):
        assert parse_seller_key("CC:123\n") == SellerKey(document_type="CC", document_number="123")

    @pytest.mark.parametrize("line", ["", "CC", "CC:1:Ana"])
    def test_not_an_identity(self, line):
        assert parse_seller_key(line) is None

    def test_keys_are_hashable_and_equal_by_value(self):
        a = SellerKey(document_type="CC", document_number="1")
        b = SellerKey(document_type="CC", document_number="1")
        assert {a: 1}[b] == 1
