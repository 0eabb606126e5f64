from __future__ import annotations

from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from kcnotes.errors import BadRequest

M = TypeVar("M", bound=BaseModel)


def _message(err: dict[str, Any]) -> str:
    loc = [str(p) for p in err.get("loc", ()) if p != "__root__"]
    field = loc[0] if loc else "body"
    label = field.capitalize()
    kind = err.get("type", "")
    ctx = err.get("ctx") or {}

    if kind == "missing":
        return f"{label} is required."
    if kind == "string_too_short":
        if ctx.get("min_length") == 1:
            return f"{label} is required."
        return f"{label} must be at least {ctx.get('min_length')} chars."
    if kind == "string_too_long":
        return f"{label} must be at most {ctx.get('max_length')} chars."
    if kind in ("string_type", "model_type", "dict_type"):
        return f"{label} must be a string." if loc else "Request body must be a JSON object."
    if kind == "value_error":
        return str(ctx.get("error") or err.get("msg"))
    return f"{label}: {err.get('msg')}"


def validate_body(model: Type[M], payload: Any) -> M:
    """Build ``model`` from a decoded JSON body; the first problem becomes a 400."""
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        errors = exc.errors()
        raise BadRequest(_message(errors[0]) if errors else None) from exc
