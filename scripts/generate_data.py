"""
Synthetic test-data generator.

Produces, inside the configured data directory:
  - a seller source       (TYPE:NUMBER:NAME:LASTNAME per line)
  - a product source      (ID:NAME:PRICE per line, price with ',' decimals)
  - one sale source per seller, named TYPE_NUMBER.txt
      first line  TYPE:NUMBER
      then        PRODUCTID:QUANTITY;  (1-5 distinct products, 1-10 units)

Run as a script to generate the data and build both reports:

    python -m scripts.generate_data [sellers] [products] [--seed N]
"""

import argparse
import random
import sys
from decimal import Decimal
from pathlib import Path
from typing import Optional, Sequence

from app.config import Settings
from app.errors import SalesDataError
from app.logging_config import configure_logging
from app.pipeline import run_pipeline

DOCUMENT_TYPES = ["CC", "CE", "NIT", "TI", "PP"]
NAMES = ["Juan", "María", "Carlos", "Ana", "Pedro", "Laura", "Diego", "Sofía", "Miguel", "Valentina"]
LAST_NAMES = ["Gómez", "Rodríguez", "López", "Martínez", "González",
              "Pérez", "Sánchez", "Ramírez", "Torres", "Díaz"]
PRODUCTS = ["Laptop", "Smartphone", "Tablet", "Monitor", "Teclado",
            "Mouse", "Audífonos", "Impresora", "Cámara", "Altavoces"]

PRICE_MIN = 10_000
PRICE_MAX = 1_000_000
MAX_PRODUCTS_PER_SELLER = 5
MAX_QUANTITY = 10


def product_id(index: int) -> str:
    return f"P{index + 1:03d}"


def _random_seller_id(rng: random.Random) -> str:
    return f"{rng.choice(DOCUMENT_TYPES)}:{rng.randrange(100_000_000):08d}"


def _write_lines(path: Path, lines: Sequence[str]) -> None:
    with path.open("w", encoding="utf-8", newline="\n") as fh:
        for line in lines:
            fh.write(line + "\n")


def create_sellers_file(
    data_dir: Path, count: int, rng: random.Random, file_name: str = "vendedores.txt"
) -> list[str]:
    """Write ``count`` random sellers and return their ``TYPE:NUMBER`` identities."""
    seller_ids: list[str] = []
    lines: list[str] = []
    for _ in range(count):
        seller_id = _random_seller_id(rng)
        lines.append(f"{seller_id}:{rng.choice(NAMES)}:{rng.choice(LAST_NAMES)}")
        seller_ids.append(seller_id)
    _write_lines(data_dir / file_name, lines)
    return seller_ids


def create_products_file(
    data_dir: Path, count: int, rng: random.Random, file_name: str = "productos.txt"
) -> None:
    lines = []
    for i in range(count):
        name = f"{PRODUCTS[i % len(PRODUCTS)]} {i // len(PRODUCTS) + 1}"
        price = Decimal(str(round(rng.uniform(PRICE_MIN, PRICE_MAX), 2))).quantize(Decimal("0.01"))
        lines.append(f"{product_id(i)}:{name}:{str(price).replace('.', ',')}")
    _write_lines(data_dir / file_name, lines)


def _sale_lines(rng: random.Random, product_indexes: Sequence[int]) -> list[str]:
    return [f"{product_id(i)}:{rng.randint(1, MAX_QUANTITY)};" for i in product_indexes]


def create_sales_files(
    data_dir: Path, seller_ids: Sequence[str], products_count: int, rng: random.Random
) -> list[Path]:
    paths = []
    for seller_id in seller_ids:
        sold = rng.sample(
            range(products_count),
            min(rng.randint(1, MAX_PRODUCTS_PER_SELLER), products_count),
        )
        path = data_dir / (seller_id.replace(":", "_") + ".txt")
        _write_lines(path, [seller_id, *_sale_lines(rng, sold)])
        paths.append(path)
    return paths


def create_salesman_file(
    data_dir: Path,
    sales_count: int,
    name: str,
    seller_id: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> Path:
    """Write a single sale source ``vendedor_<name>.txt`` selling P001..P<sales_count>."""
    rng = rng or random.Random()
    data_dir.mkdir(parents=True, exist_ok=True)
    seller_id = seller_id or _random_seller_id(rng)
    path = data_dir / f"vendedor_{name}.txt"
    _write_lines(path, [seller_id, *_sale_lines(rng, range(sales_count))])
    return path


def generate(
    settings: Settings,
    sellers_count: int = 5,
    products_count: int = 10,
    seed: Optional[int] = None,
    clean: bool = False,
) -> list[str]:
    if sellers_count < 1 or products_count < 1:
        raise ValueError("sellers_count and products_count must be positive")

    rng = random.Random(seed)
    data_dir = settings.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    if clean:
        for old in data_dir.glob("*.txt"):
            old.unlink()

    seller_ids = create_sellers_file(data_dir, sellers_count, rng, settings.sellers_file)
    create_products_file(data_dir, products_count, rng, settings.products_file)
    create_sales_files(data_dir, seller_ids, products_count, rng)
    return seller_ids


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return number


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate synthetic sales sources and build the sales reports."
    )
    parser.add_argument("sellers", nargs="?", type=_positive_int, default=5,
                        help="Number of sellers to generate (default 5).")
    parser.add_argument("products", nargs="?", type=_positive_int, default=10,
                        help="Number of products to generate (default 10).")
    parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    parser.add_argument("--clean", action="store_true",
                        help="Remove existing .txt sources from the data directory first.")
    parser.add_argument("--salesman", metavar="NAME", default=None,
                        help="Also write vendedor_NAME.txt for the first generated seller.")
    parser.add_argument("--salesman-sales", type=_positive_int, default=3,
                        help="Products sold in the --salesman source (default 3).")
    parser.add_argument("--no-report", action="store_true",
                        help="Only generate the data, do not build reports.")
    args = parser.parse_args(argv)

    settings = Settings()
    configure_logging(settings.log_level)

    seller_ids = generate(settings, args.sellers, args.products, seed=args.seed, clean=args.clean)
    if args.salesman:
        create_salesman_file(
            settings.data_dir,
            min(args.salesman_sales, args.products),
            args.salesman,
            seller_ids[0],
            rng=random.Random(args.seed),
        )
    print(f"Files generated in: {settings.data_dir}")

    if args.no_report:
        return 0

    try:
        result = run_pipeline(settings)
    except SalesDataError as exc:
        print(f"Error while processing: {exc}", file=sys.stderr)
        return 1

    print(f"Processing completed. Reports written to: {settings.output_dir}")
    print(f"  {result.seller_report}")
    print(f"  {result.product_report}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
