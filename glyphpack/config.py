"""
Settings for the icon compiler.

Defaults reproduce the fixed layout of the target crate: Piskel C export at
``icons-input.c`` in, ``src/icons/icons<size>.rs`` out. Every value can be
overridden with a ``GLYPHPACK_`` prefixed environment variable or by passing
a Settings instance into the pipeline.
"""
import logging

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GLYPHPACK_", extra="ignore")

    # Paths
    INPUT_PATH: str = "icons-input.c"
    OUTPUT_DIR: str = "src/icons"

    # Pixel encoding (32-bit ARGB literals as written by Piskel)
    OPAQUE_PIXEL: str = "0xff000000"
    TRANSPARENT_PIXEL: str = "0x00000000"

    # Preview comment
    MARKER_CHAR: str = "#"
    BLANK_CHAR: str = " "
    BORDER_CHAR: str = "*"

    # Generated source
    MACRO_IMPORT: str = "crate::make_icon_set"

    LOG_LEVEL: str = "INFO"

    @field_validator("OPAQUE_PIXEL", "TRANSPARENT_PIXEL")
    @classmethod
    def _literal_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("pixel literal must not be empty")
        return value

    @field_validator("MARKER_CHAR", "BLANK_CHAR", "BORDER_CHAR")
    @classmethod
    def _single_char(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError(f"expected exactly one character, got {value!r}")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown log level {value!r}")
        return value

    @model_validator(mode="after")
    def _distinct_literals(self) -> "Settings":
        if self.OPAQUE_PIXEL == self.TRANSPARENT_PIXEL:
            raise ValueError("OPAQUE_PIXEL and TRANSPARENT_PIXEL must differ")
        return self


settings = Settings()
