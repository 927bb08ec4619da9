"""Base model for relay board payloads.

Every wire model inherits from :class:`DeviceModel` which provides:

* ``frozen=True`` so parsed snapshots can be shared without copying.
* ``extra="ignore"`` so newer firmware fields do not break parsing.
* Stashing of the original payload in ``raw`` for models that declare
  that field.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


def blank_to_none(value: Any) -> Any:
    """Return ``None`` for blank strings, *value* otherwise."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class DeviceModel(BaseModel):
    """Base for relay board response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        if "raw" in cls.model_fields and "raw" not in values:
            return {**values, "raw": dict(values)}
        return values
