"""Pydantic schemas for runtime validation of converter settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from line_converter.culture import DEFAULT_CULTURE_NAME, Culture
from line_converter.errors import UnknownCultureError


class Settings(BaseModel):
    """Validated run settings shared by every converted file."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    source_culture_name: str = Field(
        default=DEFAULT_CULTURE_NAME, alias="SourceCultureName"
    )
    verbose: bool = Field(default=False, alias="Verbose")

    @field_validator("source_culture_name")
    @classmethod
    def _validate_culture(cls, value: str) -> str:
        try:
            Culture.from_name(value)
        except UnknownCultureError as exc:
            raise ValueError(str(exc)) from exc
        return value.strip()

    @property
    def culture(self) -> Culture:
        """Culture used to parse input lines."""
        return Culture.from_name(self.source_culture_name)
