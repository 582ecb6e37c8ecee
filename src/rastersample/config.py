# src/rastersample/config.py
from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Config unificada del proyecto. No toca disco (salvo `.env`).
    Debe ser construida y provista por composition/di.py (CLI/adapters).
    """
    model_config = SettingsConfigDict(
        frozen=True,
        env_file=".env",
        env_prefix="RSAMPLE_",
        env_nested_delimiter="__",
        extra="forbid",
    )

    # --- autoridad EPSG ---
    lenient_epsg_lookup: bool = True
    epsg_min_confidence: int = Field(70, ge=0, le=100)  # sólo aplica en modo leniente; <70 acepta CRS no equivalentes

    # --- muestreo ---
    default_band: int = Field(1, ge=1)

    # --- logging ---
    log_level: str = "WARNING"

    # ----------------------------
    # Normalizadores / validadores
    # ----------------------------
    @field_validator("log_level", mode="before")
    @classmethod
    def _valid_level(cls, v: str) -> str:
        v2 = str(v).strip().upper()
        if not isinstance(logging.getLevelName(v2), int):
            raise ValueError(f"log_level inválido: {v}")
        return v2

    def log_level_no(self) -> int:
        return logging.getLevelName(self.log_level)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Instancia cacheada. Úsala SOLO desde composition/di.py o CLI.
    Prohibido usarla en services/ (dominio). Para tests, recuerda limpiar:
        get_settings.cache_clear()
    """
    return Settings()
