"""
Pydantic models for report rows.

A row is one extracted value: the result file it came from, the raw value
text and the key that matched it.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MatchMode(str, Enum):
    """How a key is matched against a fragment."""

    SUBSTRING = "substring"
    EXACT = "exact"

    @classmethod
    def parse(cls, value: "str | MatchMode") -> "MatchMode":
        """Return the mode named by ``value``, raising ValueError if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown match mode: {value!r} (expected one of {names})") from None


class ReportRow(BaseModel):
    """A single line of the report."""

    name: str = Field(..., description="Result file name without the .json suffix")
    value: str = Field(..., description="Raw text following the key's colon")
    key: str = Field(..., description="Key that matched the fragment")

    model_config = ConfigDict(frozen=True)

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Keys must be non-empty; an empty key would match every fragment."""
        if not v:
            raise ValueError("Key must not be empty")
        return v

    def to_line(self) -> str:
        """Render the row as ``name value key``."""
        return f"{self.name} {self.value} {self.key}"
