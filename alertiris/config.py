"""Relay configuration — remote API, fingerprint store, and alert mapping knobs."""

from __future__ import annotations

import os
from enum import Enum

from pydantic import BaseModel
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

CONFIG_PATH_ENV = "ALERTIRIS_CONFIG"
DEFAULT_CONFIG_PATH = "config.toml"


class ResolvedAction(str, Enum):
    UPDATE = "update"
    DELETE = "delete"


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080
    shutdown_grace_seconds: int = 10


class IrisSettings(BaseModel):
    url: str = "https://localhost"
    api_key: str = ""
    skip_tls_verify: bool = False
    timeout_seconds: float = 30.0


class StoreSettings(BaseModel):
    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = "fp:"


class AlertSettings(BaseModel):
    source: str = "alertmanager"
    customer_id: int = 1
    classification_id: int | None = None
    status_id_new: int = 2
    status_id_resolved: int = 6
    resolved_action: ResolvedAction = ResolvedAction.UPDATE
    default_severity_id: int = 4

    # Alertmanager severity label value -> remote severity code
    severity_map: dict[str, int] = {}

    # Alertmanager receiver name -> customer ID override
    customer_map: dict[str, int] = {}

    def customer_for(self, receiver: str) -> int:
        return self.customer_map.get(receiver, self.customer_id)


class TelemetrySettings(BaseModel):
    log_level: str = "INFO"
    otlp_endpoint: str | None = None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ALERTIRIS_",
        env_nested_delimiter="__",
    )

    server: ServerSettings = ServerSettings()
    iris: IrisSettings = IrisSettings()
    store: StoreSettings = StoreSettings()
    alerts: AlertSettings = AlertSettings()
    telemetry: TelemetrySettings = TelemetrySettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_path = os.getenv(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=toml_path),
        )
