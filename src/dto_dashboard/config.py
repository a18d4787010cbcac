from dataclasses import dataclass

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dto_dashboard.errors import ConfigurationError


def _require(**values: str) -> None:
    """Raise for the first empty value, named by its environment variable."""
    for name, value in values.items():
        if not value:
            raise ConfigurationError(name.upper())


@dataclass(frozen=True)
class StorageConfig:
    storage_account: str
    storage_container: str
    storage_sas_token: str

    def __post_init__(self):
        _require(
            storage_account=self.storage_account,
            storage_container=self.storage_container,
            storage_sas_token=self.storage_sas_token,
        )


@dataclass(frozen=True)
class CatalogConfig:
    catalog_endpoint: str

    def __post_init__(self):
        _require(catalog_endpoint=self.catalog_endpoint)


@dataclass(frozen=True)
class AssistantConfig:
    ai_base_url: str
    ai_key: str
    ai_deployment: str
    ai_api_version: str

    def __post_init__(self):
        _require(
            ai_base_url=self.ai_base_url,
            ai_key=self.ai_key,
            ai_deployment=self.ai_deployment,
            ai_api_version=self.ai_api_version,
        )


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Blob storage (SAS upload)
    storage_account: str = Field(default="")
    storage_container: str = Field(default="")
    storage_sas_token: str = Field(default="")

    # Document catalog
    catalog_endpoint: str = Field(default="")

    # Chat completions
    ai_base_url: str = Field(default="")
    ai_key: str = Field(default="")
    ai_deployment: str = Field(default="")
    ai_api_version: str = Field(default="")

    # Redis
    redis_url: str = Field(default="redis://redis:6379/0")
    redis_timeout_seconds: float = Field(default=5.0)

    # App
    log_level: str = Field(default="INFO")
    http_timeout_seconds: float = Field(default=30.0)

    # Upload limits
    max_upload_size_mb: int = Field(default=10)

    # Pipeline estimate, in seconds
    pipeline_extraction_start_delay: float = Field(default=1.5)
    pipeline_extraction_duration: float = Field(default=10.0)
    pipeline_persistence_retry_delay: float = Field(default=2.0)

    def storage_config(self) -> StorageConfig:
        return StorageConfig(
            storage_account=self.storage_account,
            storage_container=self.storage_container,
            storage_sas_token=self.storage_sas_token,
        )

    def catalog_config(self) -> CatalogConfig:
        return CatalogConfig(catalog_endpoint=self.catalog_endpoint)

    def assistant_config(self) -> AssistantConfig:
        return AssistantConfig(
            ai_base_url=self.ai_base_url,
            ai_key=self.ai_key,
            ai_deployment=self.ai_deployment,
            ai_api_version=self.ai_api_version,
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
