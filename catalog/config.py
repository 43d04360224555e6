# catalog/config.py
import os
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel

# Runtime settings. Everything can be overridden from the environment.


class Settings(BaseModel):
    data_dir: Path = Path(".")
    products_file: str = "products.json"
    carts_file: str = "carts.json"
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    @property
    def products_path(self) -> Path:
        return self.data_dir / self.products_file

    @property
    def carts_path(self) -> Path:
        return self.data_dir / self.carts_file


def load_settings() -> Settings:
    return Settings(
        data_dir=Path(os.getenv("CATALOG_DATA_DIR", ".")),
        products_file=os.getenv("CATALOG_PRODUCTS_FILE", "products.json"),
        carts_file=os.getenv("CATALOG_CARTS_FILE", "carts.json"),
        host=os.getenv("CATALOG_HOST", "0.0.0.0"),
        port=int(os.getenv("CATALOG_PORT", 8080)),
        log_level=os.getenv("CATALOG_LOG_LEVEL", "INFO").upper(),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
