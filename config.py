from __future__ import annotations

from datetime import tzinfo
from typing import Any, Dict, Mapping, Optional, Tuple

from dateutil import tz
from pydantic import Field, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from storage import STORAGE_KEY


def _streamlit_secrets() -> Mapping[str, Any]:
    import streamlit as st

    try:
        return {k: st.secrets[k] for k in st.secrets.keys()}
    except FileNotFoundError:
        # no .streamlit/secrets.toml
        return {}


class StreamlitSecretsSource(PydanticBaseSettingsSource):
    """Top-level keys of .streamlit/secrets.toml, e.g. STORAGE_DIR = "..."."""

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        self.secrets = _streamlit_secrets()

    def get_field_value(self, field: FieldInfo, field_name: str) -> Tuple[Any, str, bool]:
        return self.secrets.get(field_name.upper()), field_name, False

    def __call__(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for field_name, field in self.settings_cls.model_fields.items():
            value, key, _ = self.get_field_value(field, field_name)
            if value is not None:
                values[key] = value
        return values


class Settings(BaseSettings):
    """
    Itinerary settings. ITINERARY_* environment variables (or .env) win over
    secrets.toml, which wins over the defaults below.
    """

    model_config = SettingsConfigDict(
        env_prefix="ITINERARY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    storage_dir: str = Field(
        default=".itinerary",
        description="Where trips are kept on this machine (empty = memory only)",
    )
    storage_key: str = Field(default=STORAGE_KEY, description="Key the trip list is stored under")
    parse_timezone: str = Field(
        default="",
        description="IANA zone for reading typed dates/times (empty = machine local)",
    )
    show_dev_details: bool = Field(
        default=False,
        description="Show the raw stored records in an expander",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            StreamlitSecretsSource(settings_cls),
        )

    @field_validator("parse_timezone")
    @classmethod
    def validate_parse_timezone(cls, v: str) -> str:
        v = v.strip()
        if v and tz.gettz(v) is None:
            raise ValueError(f"Unknown timezone: {v!r}")
        return v

    def parse_zone(self) -> Optional[tzinfo]:
        if not self.parse_timezone:
            return None
        return tz.gettz(self.parse_timezone)


def load_settings() -> Settings:
    return Settings()
