"""Shared base for models that mirror the camelCase JSON the agents emit."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


def _coerce_score(value: Any) -> int:
    """Turn 87, 87.4, "87" or "87/100" into an int clamped to 0-100."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        value = value.strip().split("/")[0].rstrip("%").strip()
    try:
        number = round(float(value))
    except (TypeError, ValueError):
        return 0
    return max(0, min(100, number))


Score = Annotated[int, BeforeValidator(_coerce_score)]


def _as_list(value: Any) -> Any:
    """A lone string (or number) where a list is expected becomes a one-item list."""
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return [value] if str(value).strip() else []
    return value


StrList = Annotated[list[str], BeforeValidator(_as_list)]


class CamelModel(BaseModel):
    """Lenient model: camelCase aliases, unknown keys ignored, nulls mean "use default"."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    def to_json_dict(self) -> dict[str, Any]:
        """Dump using the camelCase wire names."""
        return self.model_dump(by_alias=True)
