from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApidescSettings(BaseSettings):
    """
    Runtime configuration, read from APIDESC_* environment variables
    (or a local .env file).
    """

    model_config = SettingsConfigDict(
        env_prefix="APIDESC_",
        env_file=".env",
        extra="ignore",
    )

    type_validation: bool = Field(
        True,
        description="Check parameter values against their declared type constraints",
    )
    annotation_marker: str = Field(
        "@cmd",
        description="Docstring marker that introduces a parameter annotation",
    )
    log_level: str = Field("WARNING", description="Root log level used by the CLI")
