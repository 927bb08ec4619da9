"""Shared helpers for endpoint modules."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from pyesprelay.exceptions import RelayDecodeError

TModel = TypeVar("TModel", bound=BaseModel)


def decode_model(model_cls: type[TModel], payload: Any, endpoint: str) -> TModel:
    """Validate *payload* as *model_cls*, mapping failures to :class:`RelayDecodeError`."""
    if not isinstance(payload, dict):
        raise RelayDecodeError(
            f"Expected a JSON object from {endpoint}, got {type(payload).__name__}",
            endpoint=endpoint,
        )
    try:
        return model_cls.model_validate(payload)
    except ValidationError as exc:
        raise RelayDecodeError(
            f"Unexpected payload shape from {endpoint}: {exc.error_count()} error(s), first: {exc.errors()[0]['msg']}",
            endpoint=endpoint,
        ) from exc
