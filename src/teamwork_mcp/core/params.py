"""
Argument binding for tool calls.

Each incoming call carries an untyped argument bag (parsed JSON). Tool
handlers describe how to move values from the bag onto a typed request with a
list of extractors and run them through ``bind``:

    request = TagCreateRequest()
    bind(
        arguments,
        required_param(request, "name"),
        optional_numeric_param(request, "project_id"),
    )

Every extractor is evaluated, all failures are reported together in one
``InvalidParamsError``, and the request is only modified when every extractor
succeeded. No coercion happens beyond integral numbers and the documented
date/time formats.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

ArgumentValue = Union[
    str, int, float, bool, None, List["ArgumentValue"], Dict[str, "ArgumentValue"]
]
Arguments = Mapping[str, ArgumentValue]

Parser = Callable[[str, Any], Any]
Validator = Callable[[Any], None]

_MISSING = object()

# request models map numeric IDs to 64-bit integers
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ParamError(ValueError):
    """A single argument failed to bind."""

    def __init__(self, key: str, message: str):
        super().__init__(message)
        self.key = key


class InvalidParamsError(ValueError):
    """Aggregate of every ParamError raised while binding one argument bag."""

    def __init__(self, errors: Sequence[ParamError]):
        self.errors = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors))

    @property
    def keys(self) -> List[str]:
        return [e.key for e in self.errors]


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _type_error(key: str, expected: str, raw: Any) -> ParamError:
    return ParamError(
        key, f"invalid type for {key}: expected {expected}, got {_json_type(raw)}"
    )


# --- Parsers --------------------------------------------------------------- #


def _parse_str(key: str, raw: Any) -> str:
    if not isinstance(raw, str):
        raise _type_error(key, "string", raw)
    return raw


def _parse_bool(key: str, raw: Any) -> bool:
    if not isinstance(raw, bool):
        raise _type_error(key, "boolean", raw)
    return raw


def _parse_float(key: str, raw: Any) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise _type_error(key, "number", raw)
    return float(raw)


def _parse_int(key: str, raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise _type_error(key, "number", raw)
    if isinstance(raw, float) and not (math.isfinite(raw) and raw.is_integer()):
        raise ParamError(
            key, f"invalid value for {key}: expected an integer, got {raw!r}"
        )
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ParamError(
            key, f"invalid value for {key}: {raw!r} is out of the 64-bit integer range"
        )
    return value


_SCALAR_PARSERS: Dict[type, Parser] = {
    str: _parse_str,
    bool: _parse_bool,
    float: _parse_float,
    int: _parse_int,
}


def _scalar_parser(kind: type) -> Parser:
    try:
        return _SCALAR_PARSERS[kind]
    except KeyError:
        raise TypeError(f"unsupported parameter kind: {kind!r}") from None


def _list_parser(item: Parser) -> Parser:
    def parse(key: str, raw: Any) -> List[Any]:
        if not isinstance(raw, list):
            raise _type_error(key, "array", raw)
        return [item(f"{key}[{i}]", value) for i, value in enumerate(raw)]

    return parse


_RFC3339_RE = re.compile(
    r"(\d{4}-\d{2}-\d{2})T(\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})",
    re.IGNORECASE,
)
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_LEGACY_DATE_RE = re.compile(r"\d{8}")
_TIME_ONLY_RE = re.compile(r"\d{2}:\d{2}:\d{2}")


def _to_rfc3339(value: str) -> datetime:
    match = _RFC3339_RE.fullmatch(value)
    if not match:
        raise ValueError(value)
    day, clock, fraction, offset = match.groups()
    parsed = datetime.strptime(f"{day}T{clock}", "%Y-%m-%dT%H:%M:%S")
    if fraction:
        parsed = parsed.replace(microsecond=int(fraction[:6].ljust(6, "0")))
    if offset.upper() == "Z":
        tz = timezone.utc
    else:
        sign = -1 if offset[0] == "-" else 1
        hours, minutes = int(offset[1:3]), int(offset[4:6])
        if hours > 23 or minutes > 59:
            raise ValueError(value)
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
    return parsed.replace(tzinfo=tz)


def _to_date(value: str) -> date:
    if not _DATE_RE.fullmatch(value):
        raise ValueError(value)
    return datetime.strptime(value, "%Y-%m-%d").date()


def _to_legacy_date(value: str) -> date:
    if not _LEGACY_DATE_RE.fullmatch(value):
        raise ValueError(value)
    return datetime.strptime(value, "%Y%m%d").date()


def _to_time_only(value: str) -> time:
    if not _TIME_ONLY_RE.fullmatch(value):
        raise ValueError(value)
    return datetime.strptime(value, "%H:%M:%S").time()


def _format_parser(label: str, convert: Callable[[str], Any]) -> Parser:
    def parse(key: str, raw: Any) -> Any:
        if not isinstance(raw, str):
            raise _type_error(key, f"string in {label} format", raw)
        try:
            return convert(raw)
        except ValueError:
            raise ParamError(
                key, f"invalid value for {key}: expected {label} format, got {raw!r}"
            ) from None

    return parse


RFC3339 = "RFC3339 (YYYY-MM-DDTHH:MM:SSZ)"
DATE_FORMAT = "YYYY-MM-DD"
LEGACY_DATE_FORMAT = "YYYYMMDD"
TIME_ONLY_FORMAT = "HH:MM:SS"

_parse_time = _format_parser(RFC3339, _to_rfc3339)
_parse_date = _format_parser(DATE_FORMAT, _to_date)
_parse_legacy_date = _format_parser(LEGACY_DATE_FORMAT, _to_legacy_date)
_parse_time_only = _format_parser(TIME_ONLY_FORMAT, _to_time_only)


# --- Extractors ------------------------------------------------------------ #


@dataclass(frozen=True)
class Param:
    """Extractor binding one key of the argument bag to one attribute of a target."""

    target: Any
    key: str
    attr: str
    parse: Parser
    required: bool = False
    validators: Tuple[Validator, ...] = ()

    def extract(self, arguments: Arguments) -> Any:
        """Return the parsed value, or the missing sentinel for absent optionals."""
        raw = arguments.get(self.key)
        if raw is None:
            if self.required:
                raise ParamError(self.key, f"missing required parameter: {self.key}")
            return _MISSING

        value = self.parse(self.key, raw)
        for validator in self.validators:
            try:
                validator(value)
            except ValueError as exc:
                raise ParamError(
                    self.key, f"invalid value for {self.key}: {exc}"
                ) from exc
        return value


def bind(arguments: Optional[Arguments], *params: Param) -> None:
    """
    Run every extractor against ``arguments``.
    Raises InvalidParamsError listing all failures; targets are only assigned
    when every extractor succeeded.
    """
    arguments = arguments or {}
    errors: List[ParamError] = []
    values: List[Tuple[Param, Any]] = []

    for param in params:
        try:
            value = param.extract(arguments)
        except ParamError as exc:
            errors.append(exc)
            continue
        if value is not _MISSING:
            values.append((param, value))

    if errors:
        raise InvalidParamsError(errors)

    for param, value in values:
        setattr(param.target, param.attr, value)


def restrict_values(*allowed: Any) -> Validator:
    """Validator accepting only ``allowed`` (checked per item for lists)."""

    def validate(value: Any) -> None:
        items = value if isinstance(value, list) else [value]
        for item in items:
            if item not in allowed:
                valid = ", ".join(str(a) for a in allowed)
                raise ValueError(f"{item!r} is not one of the valid values: {valid}")

    return validate


def _param(
    target: Any,
    key: str,
    parse: Parser,
    validators: Tuple[Validator, ...],
    *,
    required: bool,
    attr: Optional[str],
) -> Param:
    return Param(
        target=target,
        key=key,
        attr=attr or key,
        parse=parse,
        required=required,
        validators=validators,
    )


def required_param(
    target: Any,
    key: str,
    *validators: Validator,
    kind: type = str,
    attr: Optional[str] = None,
) -> Param:
    return _param(
        target, key, _scalar_parser(kind), validators, required=True, attr=attr
    )


def optional_param(
    target: Any,
    key: str,
    *validators: Validator,
    kind: type = str,
    attr: Optional[str] = None,
) -> Param:
    """Absent keys leave the target attribute at its default (zero value or None)."""
    return _param(
        target, key, _scalar_parser(kind), validators, required=False, attr=attr
    )


def required_numeric_param(
    target: Any, key: str, *validators: Validator, attr: Optional[str] = None
) -> Param:
    return _param(target, key, _parse_int, validators, required=True, attr=attr)


def optional_numeric_param(
    target: Any, key: str, *validators: Validator, attr: Optional[str] = None
) -> Param:
    return _param(target, key, _parse_int, validators, required=False, attr=attr)


def required_list_param(
    target: Any,
    key: str,
    *validators: Validator,
    kind: type = str,
    attr: Optional[str] = None,
) -> Param:
    return _param(
        target,
        key,
        _list_parser(_scalar_parser(kind)),
        validators,
        required=True,
        attr=attr,
    )


def optional_list_param(
    target: Any,
    key: str,
    *validators: Validator,
    kind: type = str,
    attr: Optional[str] = None,
) -> Param:
    return _param(
        target,
        key,
        _list_parser(_scalar_parser(kind)),
        validators,
        required=False,
        attr=attr,
    )


def required_numeric_list_param(
    target: Any, key: str, *validators: Validator, attr: Optional[str] = None
) -> Param:
    return _param(
        target, key, _list_parser(_parse_int), validators, required=True, attr=attr
    )


def optional_numeric_list_param(
    target: Any, key: str, *validators: Validator, attr: Optional[str] = None
) -> Param:
    return _param(
        target, key, _list_parser(_parse_int), validators, required=False, attr=attr
    )


def optional_custom_numeric_list_param(
    target: Any,
    key: str,
    factory: Callable[[List[int]], Any],
    *validators: Validator,
    attr: Optional[str] = None,
) -> Param:
    """Like optional_numeric_list_param, wrapping the result with ``factory``."""
    numbers = _list_parser(_parse_int)

    def parse(k: str, raw: Any) -> Any:
        return factory(numbers(k, raw))

    return _param(target, key, parse, validators, required=False, attr=attr)


def required_time_param(
    target: Any, key: str, *validators: Validator, attr: Optional[str] = None
) -> Param:
    """RFC3339 timestamp, e.g. ``2024-01-31T09:30:00Z``."""
    return _param(target, key, _parse_time, validators, required=True, attr=attr)


def optional_time_param(
    target: Any, key: str, *validators: Validator, attr: Optional[str] = None
) -> Param:
    return _param(target, key, _parse_time, validators, required=False, attr=attr)


def required_date_param(
    target: Any, key: str, *validators: Validator, attr: Optional[str] = None
) -> Param:
    return _param(target, key, _parse_date, validators, required=True, attr=attr)


def optional_date_param(
    target: Any, key: str, *validators: Validator, attr: Optional[str] = None
) -> Param:
    return _param(target, key, _parse_date, validators, required=False, attr=attr)


def required_legacy_date_param(
    target: Any, key: str, *validators: Validator, attr: Optional[str] = None
) -> Param:
    """Compact ``YYYYMMDD`` date used by the older API endpoints."""
    return _param(
        target, key, _parse_legacy_date, validators, required=True, attr=attr
    )


def optional_legacy_date_param(
    target: Any, key: str, *validators: Validator, attr: Optional[str] = None
) -> Param:
    return _param(
        target, key, _parse_legacy_date, validators, required=False, attr=attr
    )


def required_time_only_param(
    target: Any, key: str, *validators: Validator, attr: Optional[str] = None
) -> Param:
    return _param(target, key, _parse_time_only, validators, required=True, attr=attr)


def optional_time_only_param(
    target: Any, key: str, *validators: Validator, attr: Optional[str] = None
) -> Param:
    return _param(
        target, key, _parse_time_only, validators, required=False, attr=attr
    )


def _object_parser(build: Callable[[Arguments], Any]) -> Parser:
    def parse(key: str, raw: Any) -> Any:
        if not isinstance(raw, dict):
            raise _type_error(key, "object", raw)
        try:
            return build(raw)
        except InvalidParamsError as exc:
            raise ParamError(key, f"invalid {key}: {exc}") from exc

    return parse


def required_object_param(
    target: Any,
    key: str,
    build: Callable[[Arguments], Any],
    *validators: Validator,
    attr: Optional[str] = None,
) -> Param:
    return _param(
        target, key, _object_parser(build), validators, required=True, attr=attr
    )


def optional_object_param(
    target: Any,
    key: str,
    build: Callable[[Arguments], Any],
    *validators: Validator,
    attr: Optional[str] = None,
) -> Param:
    """Nested object; ``build`` binds the inner mapping and returns the value."""
    return _param(
        target, key, _object_parser(build), validators, required=False, attr=attr
    )


def optional_object_list_param(
    target: Any,
    key: str,
    build: Callable[[Arguments], Any],
    *validators: Validator,
    attr: Optional[str] = None,
) -> Param:
    return _param(
        target,
        key,
        _list_parser(_object_parser(build)),
        validators,
        required=False,
        attr=attr,
    )


__all__ = [
    "ArgumentValue",
    "Arguments",
    "Param",
    "ParamError",
    "InvalidParamsError",
    "bind",
    "restrict_values",
    "required_param",
    "optional_param",
    "required_numeric_param",
    "optional_numeric_param",
    "required_list_param",
    "optional_list_param",
    "required_numeric_list_param",
    "optional_numeric_list_param",
    "optional_custom_numeric_list_param",
    "required_time_param",
    "optional_time_param",
    "required_date_param",
    "optional_date_param",
    "required_legacy_date_param",
    "optional_legacy_date_param",
    "required_time_only_param",
    "optional_time_only_param",
    "required_object_param",
    "optional_object_param",
    "optional_object_list_param",
    "RFC3339",
    "DATE_FORMAT",
    "LEGACY_DATE_FORMAT",
    "TIME_ONLY_FORMAT",
]
