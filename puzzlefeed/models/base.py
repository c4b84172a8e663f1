"""Base model class and shared helpers for document-backed models."""

import math
from datetime import datetime
from typing import Any, Optional

import pendulum
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    """Base model for documents read from the user/puzzle store.

    Documents use camelCase keys (``statsByCategory``); attributes are
    snake_case. Both spellings are accepted on input and unknown document
    fields are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_document(self) -> dict:
        """Dump the model using document (camelCase) keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a stored timestamp into a timezone-aware datetime.

    Accepts datetimes, ISO-8601 strings, epoch milliseconds and
    ``{"seconds": ..., "nanoseconds": ...}`` mappings (with or without the
    leading underscore used by exported documents).

    Returns:
        Parsed datetime, or None if the value is missing or unparseable
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return pendulum.instance(value, tz="UTC")
        return value

    try:
        if isinstance(value, (int, float)):
            if not math.isfinite(value):
                return None
            return pendulum.from_timestamp(value / 1000.0)

        if isinstance(value, dict):
            seconds = value.get("seconds", value.get("_seconds"))
            if seconds is None:
                return None
            nanos = value.get("nanoseconds", value.get("_nanoseconds")) or 0
            return pendulum.from_timestamp(float(seconds) + float(nanos) / 1e9)

        if isinstance(value, str):
            if not value.strip():
                return None
            parsed = pendulum.parse(value.strip())
            return parsed if isinstance(parsed, datetime) else None
    except (TypeError, ValueError, OverflowError, OSError):
        return None

    return None
