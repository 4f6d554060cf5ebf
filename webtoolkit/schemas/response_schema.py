"""Unified API response envelope."""

from typing import Any

from pydantic import BaseModel, SerializerFunctionWrapHandler, model_serializer


class JSONEnvelope(BaseModel):
    """Standard ``{error, message, data}`` response body.

    ``data`` is left out of the serialized form when it is ``None``.
    """

    error: bool = False
    message: str = ""
    data: Any | None = None

    @model_serializer(mode="wrap")
    def _omit_empty_data(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        payload = handler(self)
        if payload.get("data") is None:
            payload.pop("data", None)
        return payload


def success_envelope(data: Any = None, message: str = "Success") -> JSONEnvelope:
    """Build a success envelope for returning from endpoints."""
    return JSONEnvelope(error=False, message=message, data=data)


def error_envelope(error: BaseException | str) -> JSONEnvelope:
    """Build an error envelope from an exception or message."""
    return JSONEnvelope(error=True, message=str(error))
