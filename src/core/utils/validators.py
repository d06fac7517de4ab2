"""Request validation helpers for the Lambda handlers."""

from typing import Any, TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)

# (substring of the lowercased pydantic message, message returned to clients)
_FRIENDLY_MESSAGES: tuple[tuple[str, str], ...] = (
    ("base64", "File must be a valid Base64-encoded string"),
    ("field required", "This field is required"),
    ("uuid", "Must be a valid image identifier"),
    ("type", "Invalid value type"),
)


def _friendly_message(raw: str) -> str:
    message = raw.removeprefix("Value error,").strip()
    lowered = message.lower()

    for needle, friendly in _FRIENDLY_MESSAGES:
        if needle in lowered:
            return friendly

    return message


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Reduce pydantic error dicts to `{"field", "message"}` pairs.

    Drops `input`, `ctx` and `url`, which can echo request payloads (such as
    base64 image data) or pydantic internals back to the client.
    """
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())) or "body",
            "message": _friendly_message(err.get("msg", "Invalid value")),
        }
        for err in errors
    ]


def validate_request(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Build `model` from request data.

    Raises:
        pydantic.ValidationError: If the data does not match the model
    """
    return model.model_validate(data)
