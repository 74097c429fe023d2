from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = Field("sqlite+aiosqlite:///./cashier.db", alias="DATABASE_URL")

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_dir: Optional[str] = Field("logs", alias="LOG_DIR")

    # Receipt header
    school_name: str = Field("Pierre de la Fontaine", alias="SCHOOL_NAME")
    school_address: str = Field("AKAE après l'Ecole publique Ozoungue", alias="SCHOOL_ADDRESS")
    school_phones: str = Field(
        "077 71 55 10 / 066 31 07 08 / 077 80 27 78 / 066 30 01 40",
        alias="SCHOOL_PHONES",
    )
    cashier_label: str = Field("Caissier", alias="CASHIER_LABEL")
    currency: str = Field("CFA", alias="CURRENCY")

    matricule_allocation_attempts: int = Field(3, ge=1, alias="MATRICULE_ALLOCATION_ATTEMPTS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
