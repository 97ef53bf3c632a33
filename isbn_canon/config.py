import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    db_host: Optional[str] = None
    db_name: Optional[str] = None
    db_user: Optional[str] = None
    db_pass: Optional[str] = None
    db_port: str = "5432"
    catalog_url: Optional[str] = None
    upc_map: Optional[str] = None
    http_timeout: float = 25
    log_level: str = "INFO"

    @property
    def dsn(self) -> str:
        return (
            f"host={self.db_host} dbname={self.db_name} user={self.db_user} "
            f"password={self.db_pass} port={self.db_port}"
        )


def load_settings(env_file: Optional[str] = None) -> Settings:
    # variables already in the environment win over the .env file
    load_dotenv(env_file)
    return Settings(
        db_host=os.getenv("DB_HOST"),
        db_name=os.getenv("DB_NAME"),
        db_user=os.getenv("DB_USER"),
        db_pass=os.getenv("DB_PASS"),
        db_port=os.getenv("DB_PORT", "5432"),
        catalog_url=os.getenv("CATALOG_URL"),
        upc_map=os.getenv("UPC_MAP"),
        http_timeout=float(os.getenv("HTTP_TIMEOUT", "25")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
