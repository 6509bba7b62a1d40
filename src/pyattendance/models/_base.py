"""Base model for contents API payloads and stored records.

Every model inherits from :class:`StoreBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase JSON keys map
  automatically to snake_case fields.
* Frozen instances; unknown keys are ignored rather than rejected,
  because GitHub adds response fields over time.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StoreBaseModel(BaseModel):
    """Base for pyattendance models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
