# cineasts/common/settings.py
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional
from pydantic import BaseModel, Field, AliasChoices, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from cineasts.common.strings.normalize import csv_to_list


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    prefix: str = "/api"

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "PATCH", "DELETE", "OPTIONS"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False

    @field_validator("cors_allow_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return csv_to_list(v)


class Neo4jConfig(BaseModel):
    scheme: str = "neo4j"
    host: str = "localhost"
    port: int = 7687
    user: str = "neo4j"
    password: str = "password"
    database: str = "neo4j"
    max_connection_pool_size: int = 50
    connection_timeout_sec: float = 30.0
    apply_schema_on_startup: bool = False

    # Optional single URI (if set, it takes precedence)
    uri: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("NEO4J_URI", "neo4j_uri", "uri"),
    )

    @field_validator("apply_schema_on_startup", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v)

    @computed_field  # type: ignore[misc]
    @property
    def effective_uri(self) -> str:
        if self.uri:
            return self.uri
        return f"{self.scheme}://{self.host}:{self.port}"


class SearchConfig(BaseModel):
    default_limit: int = Field(25, ge=1)
    max_limit: int = Field(200, ge=1)


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "cineasts"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    neo4j: Neo4jConfig = Neo4jConfig()
    search: SearchConfig = SearchConfig()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # ===== Convenience =====
    @computed_field  # type: ignore[misc]
    @property
    def neo4j_uri(self) -> str:
        return self.neo4j.effective_uri

    @property
    def is_dev(self) -> bool:
        return self.app_env.lower() == "development"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from cineasts.common.settings import get_settings
        cfg = get_settings()
    """
    return Settings()  # pydantic_settings will read from .env automatically
