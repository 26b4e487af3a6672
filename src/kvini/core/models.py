from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


# ================================
# Enums
# ================================


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    YAML = "yaml"
    INI = "ini"


# ================================
# Load config (defaults only)
# ================================

DEFAULT_MAX_FILE_BYTES = 2_000_000


class LoadConfig(BaseModel):
    """
    How ini-files are read. Defaults live here.
    Repo/global/CLI overrides are merged by core/config.py.
    """

    encoding: Optional[str] = Field(
        default=None,
        description="Code page of ini-files, e.g. windows-1252. If empty then BOM or utf-8 is used.",
    )
    max_file_bytes: int = Field(default=DEFAULT_MAX_FILE_BYTES, ge=1)

    @field_validator("encoding")
    @classmethod
    def _empty_encoding_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v


# ================================
# Output config (defaults only)
# ================================


class OutputConfig(BaseModel):
    format: OutputFormat = OutputFormat.TABLE
    sort_keys: bool = True
