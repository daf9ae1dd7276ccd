from __future__ import annotations

from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from billingdesk.models.enums import Lang


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "BillingDesk"
    environment: str = Field(default="development")  # development | production
    log_level: str = Field(default="INFO")

    # CORS_ORIGINS: one URL or a comma-separated list (NoDecode keeps it a raw string).
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        validation_alias="CORS_ORIGINS",
    )

    # Calculator defaults when the request names neither a product nor an anchor.
    default_anchor_day: int = Field(default=15, ge=1, le=31)
    default_lang: Lang = Field(default=Lang.AR)
    currency_label: str = Field(default="JD")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v):  # noqa: ANN001
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_cors_origins(cls, v):  # noqa: ANN001
        if isinstance(v, str):
            v = v.split(",")
        return [str(x).strip() for x in v or [] if str(x).strip()]

    @field_validator("cors_origins", mode="after")
    @classmethod
    def _ensure_cors_origins(cls, v: list[str]) -> list[str]:
        """Empty CORS blocks every browser call; fall back to the local frontend."""
        return v or ["http://localhost:5173"]


settings = Settings()
