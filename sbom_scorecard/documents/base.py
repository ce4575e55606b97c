from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class SBOMModel(BaseModel):
    """Base for the format document models.

    Documents in the wild are loose: numbers where strings belong, explicit
    nulls, YAML timestamps, vendor extensions. Unknown keys are ignored,
    numbers and dates are coerced to strings and nulls fall back to the field
    default.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def normalize_scalars(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        normalized = {}
        for key, value in data.items():
            if value is None:
                continue
            # date covers datetime too
            if isinstance(value, date):
                value = value.isoformat()
            normalized[key] = value
        return normalized

    def is_empty(self) -> bool:
        """True when nothing beyond the defaults was populated."""
        return not self.model_dump(exclude_defaults=True)
