"""JSON request decoding and response encoding."""

import json
import re
from collections.abc import Mapping, Sequence
from collections.abc import Set as AbstractSet
from functools import lru_cache
from types import UnionType
from typing import Annotated, Any, TypeVar, Union, get_args, get_origin

import structlog
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import (
    BaseModel,
    PydanticSchemaGenerationError,
    TypeAdapter,
    ValidationError,
)
from pydantic_core import ErrorDetails
from starlette.requests import Request

from webtoolkit.core.exceptions import (
    InvalidJSONBodyError,
    InvalidJSONTargetError,
    RequestBodyTooLargeError,
)
from webtoolkit.core.settings import ToolkitConfig
from webtoolkit.schemas.response_schema import error_envelope

logger = structlog.get_logger()

T = TypeVar("T")

HeaderValue = str | Sequence[str]

_WHITESPACE = " \t\n\r"

# pydantic error types that mean "the JSON value has the wrong type"
_TYPE_ERRORS = frozenset(
    {
        "model_type",
        "model_attributes_type",
        "dataclass_type",
        "dict_type",
        "list_type",
        "tuple_type",
        "set_type",
        "frozen_set_type",
        "string_type",
        "int_type",
        "int_from_float",
        "float_type",
        "bool_type",
        "none_required",
        "bytes_type",
        "decimal_type",
        "date_type",
        "datetime_type",
        "time_type",
        "timedelta_type",
        "uuid_type",
        "enum",
        "literal_error",
        "is_instance_of",
    }
)


@lru_cache(maxsize=256)
def _adapter(target: Any) -> TypeAdapter[Any]:
    """Build (and cache) the validator for a decode target."""
    return TypeAdapter(target)


def _known_keys(model: type[BaseModel]) -> dict[str, Any]:
    """Map every accepted input key of ``model`` to its field annotation."""
    known: dict[str, Any] = {}
    for name, field in model.model_fields.items():
        known[name] = field.annotation
        if field.alias:
            known[field.alias] = field.annotation
        if isinstance(field.validation_alias, str):
            known[field.validation_alias] = field.annotation
    return known


def _join(path: str, key: Any) -> str:
    return f"{path}.{key}" if path else str(key)


def _unknown_field(target: Any, value: Any, path: str = "") -> str | None:
    """Return the dotted path of the first key no model in ``target`` declares.

    Walks ``value`` alongside the annotation: nested models, lists, tuples,
    sets, dicts and optional members are followed. Models declaring
    ``extra="allow"`` accept any key at their own level.
    """
    origin = get_origin(target)
    args = get_args(target)

    if origin is Annotated:
        return _unknown_field(args[0], value, path)

    if isinstance(target, type) and issubclass(target, BaseModel):
        if not isinstance(value, dict):
            return None
        known = _known_keys(target)
        allow_extra = target.model_config.get("extra") == "allow"
        for key, item in value.items():
            if key not in known:
                if allow_extra:
                    continue
                return _join(path, key)
            found = _unknown_field(known[key], item, _join(path, key))
            if found is not None:
                return found
        return None

    if origin in (Union, UnionType):
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1:
            return _unknown_field(members[0], value, path)
        return None

    if origin in (list, set, frozenset, Sequence, AbstractSet) and isinstance(value, list):
        item_type = args[0] if args else Any
        for index, item in enumerate(value):
            found = _unknown_field(item_type, item, _join(path, index))
            if found is not None:
                return found
        return None

    if origin is tuple and isinstance(value, list):
        if len(args) == 2 and args[1] is Ellipsis:
            item_types = [args[0]] * len(value)
        else:
            item_types = list(args)
        for index, (item_type, item) in enumerate(zip(item_types, value)):
            found = _unknown_field(item_type, item, _join(path, index))
            if found is not None:
                return found
        return None

    if origin in (dict, Mapping) and isinstance(value, dict) and len(args) == 2:
        for key, item in value.items():
            found = _unknown_field(args[1], item, _join(path, key))
            if found is not None:
                return found
    return None


class _NonFiniteConstant(ValueError):
    """``NaN`` or ``Infinity`` literal, which JSON does not allow."""


def _reject_constant(name: str) -> Any:
    raise _NonFiniteConstant(name)


_STRING_OR_CONSTANT = re.compile(r'"(?:[^"\\]|\\.)*"|(-?Infinity|NaN)', re.DOTALL)


def _constant_index(text: str, start: int) -> int:
    """Index of the first ``NaN``/``Infinity`` literal outside a string."""
    for match in _STRING_OR_CONSTANT.finditer(text, start):
        if match.group(1):
            return match.start(1)
    return start


def _byte_offset(text: str, index: int) -> int:
    """UTF-8 length of ``text`` before ``index``."""
    return len(text[:index].encode("utf-8"))


def _field_path(error: ErrorDetails) -> str:
    return ".".join(str(part) for part in error["loc"])


class JSONService:
    """Read JSON request bodies and write JSON responses."""

    def __init__(self, config: ToolkitConfig) -> None:
        self._config = config

    async def read_json(self, request: Request, target: type[T]) -> T:
        """Decode exactly one JSON value from the request body into ``target``.

        ``target`` is a pydantic model or any type pydantic can validate.
        Types are checked strictly and, unless ``allow_unknown_fields`` is
        set, keys a model does not declare are rejected.

        Raises:
            InvalidJSONBodyError: the body is empty, malformed, holds more
                than one value or does not fit ``target``.
            RequestBodyTooLargeError: the body exceeds ``max_json_size``.
            InvalidJSONTargetError: ``target`` cannot be validated into.
        """
        raw = await self._read_body(request)
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidJSONBodyError(
                f"body contains badly-formed JSON (at position {exc.start + 1})"
            ) from exc

        start = len(text) - len(text.lstrip(_WHITESPACE))
        if start == len(text):
            raise InvalidJSONBodyError("body must not be empty")

        try:
            decoded, end = json.JSONDecoder(parse_constant=_reject_constant).raw_decode(
                text, start
            )
        except json.JSONDecodeError as exc:
            raise self._syntax_error(exc) from exc
        except _NonFiniteConstant as exc:
            offset = _byte_offset(text, _constant_index(text, start)) + 1
            raise InvalidJSONBodyError(
                f"body contains badly-formed JSON (at position {offset})"
            ) from exc

        try:
            adapter = _adapter(target)
        except (PydanticSchemaGenerationError, TypeError) as exc:
            raise InvalidJSONTargetError(str(exc)) from exc

        if not self._config.allow_unknown_fields:
            unknown = _unknown_field(target, decoded)
            if unknown is not None:
                raise InvalidJSONBodyError(f'body contains unknown field "{unknown}"')

        try:
            value = adapter.validate_json(text[start:end], strict=True)
        except ValidationError as exc:
            raise self._validation_error(exc, _byte_offset(text, start) + 1) from exc

        if text[end:].strip(_WHITESPACE):
            raise InvalidJSONBodyError("body must contain only one JSON object")

        return value

    async def _read_body(self, request: Request) -> bytes:
        max_bytes = self._config.max_json_size
        body = bytearray()
        async for chunk in request.stream():
            body.extend(chunk)
            if len(body) > max_bytes:
                logger.debug("JSON body rejected", max_bytes=max_bytes)
                raise RequestBodyTooLargeError(max_bytes)
        return bytes(body)

    @staticmethod
    def _syntax_error(exc: json.JSONDecodeError) -> InvalidJSONBodyError:
        if exc.pos >= len(exc.doc) or exc.msg.startswith("Unterminated string"):
            return InvalidJSONBodyError("body contains badly-formed JSON")
        offset = _byte_offset(exc.doc, exc.pos) + 1
        return InvalidJSONBodyError(f"body contains badly-formed JSON (at position {offset})")

    @staticmethod
    def _validation_error(exc: ValidationError, value_offset: int) -> InvalidJSONBodyError:
        error = exc.errors()[0]
        kind = error["type"]
        path = _field_path(error)

        if kind == "extra_forbidden":
            return InvalidJSONBodyError(f'body contains unknown field "{path}"')
        if kind in _TYPE_ERRORS:
            if path:
                return InvalidJSONBodyError(f'body contains incorrect JSON type for field "{path}"')
            return InvalidJSONBodyError(
                f"body contains incorrect JSON type (at position {value_offset})"
            )
        if path:
            return InvalidJSONBodyError(f"{path}: {error['msg']}")
        return InvalidJSONBodyError(error["msg"])

    @staticmethod
    def write_json(
        status: int,
        data: Any,
        headers: Mapping[str, HeaderValue] | None = None,
    ) -> JSONResponse:
        """Encode ``data`` into a JSON response.

        For a header given several values only the first is sent. The
        content type is always ``application/json``.
        """
        content = jsonable_encoder(data)
        response = JSONResponse(content=content, status_code=status)
        for key, value in (headers or {}).items():
            if isinstance(value, str):
                response.headers[key] = value
            elif value:
                response.headers[key] = value[0]
        response.headers["Content-Type"] = "application/json"
        return response

    @classmethod
    def error_json(cls, error: BaseException | str, status: int = 400) -> JSONResponse:
        """Wrap ``error`` in the error envelope (``error`` is always true)."""
        return cls.write_json(status, error_envelope(error))


write_json = JSONService.write_json
error_json = JSONService.error_json
