"""Centralised configuration handling for Ledgerline."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import streamlit as st
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_DIR = Path("data") / "ledger"
DEFAULT_BASE_URL = "http://localhost:8501"


def _streamlit_section(name: str) -> Mapping[str, Any] | None:
    """Return a mapping from Streamlit secrets for the given section."""

    try:
        if hasattr(st, "secrets") and name in st.secrets:
            section = st.secrets[name]
            if isinstance(section, Mapping):
                return section
            return dict(section)
    except Exception:  # pragma: no cover - accessing secrets may fail in tests
        return None
    return None


class Settings(BaseSettings):
    """Application settings sourced from env vars and Streamlit secrets."""

    data_dir: Path = DEFAULT_DATA_DIR
    currency_symbol: str = "$"
    base_url: str = DEFAULT_BASE_URL
    log_level: str = "INFO"
    seed_demo_data: bool = False

    model_config = SettingsConfigDict(env_prefix="LEDGERLINE_", extra="ignore")

    @property
    def share_base_url(self) -> str:
        return self.base_url.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Load and cache application settings."""

    overrides: dict[str, Any] = {}
    secrets_section = _streamlit_section("ledgerline")
    if secrets_section:
        overrides = {key: secrets_section.get(key) for key in Settings.model_fields}

    return Settings(**{k: v for k, v in overrides.items() if v is not None})
