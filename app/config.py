from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``SALES_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="SALES_")

    data_dir: Path = Path("data")
    output_dir: Path = Path("reports")
    sellers_file: str = "vendedores.txt"
    products_file: str = "productos.txt"
    seller_report_file: str = "reporte_vendedores.csv"
    product_report_file: str = "reporte_productos.csv"
    # raise on unknown sellers / products instead of skipping them
    strict: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level {value!r}")
        return value

    @property
    def sellers_path(self) -> Path:
        return self.data_dir / self.sellers_file

    @property
    def products_path(self) -> Path:
        return self.data_dir / self.products_file

    @property
    def seller_report_path(self) -> Path:
        return self.output_dir / self.seller_report_file

    @property
    def product_report_path(self) -> Path:
        return self.output_dir / self.product_report_file

    @property
    def reports_share_data_dir(self) -> bool:
        return self.output_dir.resolve() == self.data_dir.resolve()
