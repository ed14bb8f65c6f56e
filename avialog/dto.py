"""Request and response shapes of the HTTP API, with JSON binding."""

import json
import re
import types
from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Optional, TypeVar, Union, get_args, get_origin

from .models import ApproachType, Country, Role, Style

T = TypeVar("T")


class BindingError(ValueError):
    """Raised when a request body cannot be bound to a request shape."""


def _uint(default: Optional[int] = 0) -> Any:
    return field(default=default, metadata={"unsigned": True})


def _required(default: str = "") -> Any:
    return field(default=default, metadata={"required": True})


@dataclass
class AircraftRequest:
    registration_number: str = _required()
    aircraft_model: str = _required()
    remarks: Optional[str] = None
    image_url: Optional[str] = None


@dataclass
class AircraftResponse:
    id: int = _uint()
    registration_number: str = ""
    aircraft_model: str = ""
    remarks: Optional[str] = None
    image_url: Optional[str] = None


@dataclass
class ContactRequest:
    avatar_url: Optional[str] = None
    first_name: str = _required()
    last_name: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    email_address: Optional[str] = None
    note: Optional[str] = None


@dataclass
class ContactResponse:
    id: int = _uint()
    avatar_url: Optional[str] = None
    first_name: str = ""
    last_name: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    email_address: Optional[str] = None
    note: Optional[str] = None


@dataclass
class GetLogbookRequest:
    start: Optional[int] = None
    end: Optional[int] = None


@dataclass
class ServerInfo:
    healthy: bool = False


@dataclass
class LandingEntry:
    approach_type: Union[ApproachType, str] = ""
    count: Optional[int] = _uint(None)
    night_count: Optional[int] = _uint(None)
    day_count: Optional[int] = _uint(None)
    airport_code: Optional[str] = None


@dataclass
class PassengerEntry:
    role: Union[Role, str] = ""
    first_name: str = ""
    last_name: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    email_address: Optional[str] = None
    note: Optional[str] = None


@dataclass
class LogbookRequest:
    aircraft_id: int = _uint()
    takeoff_time: Optional[datetime] = None
    takeoff_airport_code: str = ""
    landing_time: Optional[datetime] = None
    landing_airport_code: str = ""
    style: Union[Style, str] = ""
    remarks: Optional[str] = None
    personal_remarks: Optional[str] = None
    total_block_time: Optional[timedelta] = None
    pilot_in_command_time: Optional[timedelta] = None
    second_in_command_time: Optional[timedelta] = None
    dual_received_time: Optional[timedelta] = None
    dual_given_time: Optional[timedelta] = None
    multi_pilot_time: Optional[timedelta] = None
    night_time: Optional[timedelta] = None
    ifr_time: Optional[timedelta] = None
    ifr_actual_time: Optional[timedelta] = None
    ifr_simulated_time: Optional[timedelta] = None
    cross_country_time: Optional[timedelta] = None
    simulator_time: Optional[timedelta] = None
    signature_url: Optional[str] = None
    my_role: Union[Role, str] = ""
    passengers: Optional[list[PassengerEntry]] = None
    landings: Optional[list[LandingEntry]] = None


@dataclass
class LogbookResponse:
    aircraft_id: int = _uint()
    takeoff_time: Optional[datetime] = None
    takeoff_airport_code: str = ""
    landing_time: Optional[datetime] = None
    landing_airport_code: str = ""
    style: Union[Style, str] = ""
    remarks: Optional[str] = None
    personal_remarks: Optional[str] = None
    total_block_time: Optional[timedelta] = None
    pilot_in_command_time: Optional[timedelta] = None
    second_in_command_time: Optional[timedelta] = None
    dual_received_time: Optional[timedelta] = None
    dual_given_time: Optional[timedelta] = None
    multi_pilot_time: Optional[timedelta] = None
    night_time: Optional[timedelta] = None
    ifr_time: Optional[timedelta] = None
    ifr_actual_time: Optional[timedelta] = None
    ifr_simulated_time: Optional[timedelta] = None
    cross_country_time: Optional[timedelta] = None
    simulator_time: Optional[timedelta] = None
    signature_url: Optional[str] = None
    passengers: Optional[list[PassengerEntry]] = None
    landings: Optional[list[LandingEntry]] = None


@dataclass
class UserRequest:
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None
    signature_url: Optional[str] = None
    country: Optional[Country] = None
    phone: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    company: Optional[str] = None
    timezone: Optional[str] = None


@dataclass
class UserResponse:
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str = ""
    avatar_url: Optional[str] = None
    signature_url: Optional[str] = None
    country: Optional[Country] = None
    phone: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    company: Optional[str] = None
    timezone: Optional[str] = None


# ---------------------------------------------------------------- decoding

class _Mismatch(Exception):
    def __init__(self, kind: str, type_name: str) -> None:
        super().__init__(kind, type_name)
        self.kind = kind
        self.type_name = type_name


def _reject_constant(name: str) -> Any:
    raise BindingError(f"invalid character '{name[0]}' looking for beginning of value")


_DECODER = json.JSONDecoder(parse_constant=_reject_constant)

_RFC3339 = re.compile(
    r"(\d{4}-\d{2}-\d{2})T(\d{2}:\d{2}:\d{2})(\.\d+)?(Z|[+-]\d{2}:\d{2})"
)


def _json_kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _is_union(tp: Any) -> bool:
    return get_origin(tp) in (Union, types.UnionType)


def _is_optional(tp: Any) -> bool:
    return _is_union(tp) and type(None) in get_args(tp)


def _parse_time(text: str) -> datetime:
    match = _RFC3339.fullmatch(text)
    if match is None:
        raise BindingError(f'parsing time "{text}": not an RFC 3339 timestamp')
    date, clock, fraction, zone = match.groups()
    micro = (fraction[1:] + "000000")[:6] if fraction else "000000"
    zone = "+00:00" if zone == "Z" else zone
    try:
        return datetime.fromisoformat(f"{date}T{clock}.{micro}{zone}")
    except ValueError as exc:
        raise BindingError(f'parsing time "{text}": {exc}') from None


def _decode(value: Any, tp: Any, path: str, unsigned: bool) -> Any:
    while hasattr(tp, "__supertype__"):
        tp = tp.__supertype__
    if _is_union(tp):
        args = get_args(tp)
        if value is None and type(None) in args:
            return None
        last = None
        for arg in args:
            if arg is type(None):
                continue
            try:
                return _decode(value, arg, path, unsigned)
            except _Mismatch as exc:
                last = exc
        assert last is not None
        raise last
    origin = get_origin(tp)
    if origin is list:
        if not isinstance(value, list):
            raise _Mismatch(_json_kind(value), "array")
        (item_type,) = get_args(tp)
        return [_decode(item, item_type, path, unsigned) for item in value]
    if isinstance(tp, type) and is_dataclass(tp):
        if value is None:
            return tp()
        if not isinstance(value, dict):
            raise _Mismatch(_json_kind(value), tp.__name__)
        return _decode_struct(value, tp, path)
    if isinstance(tp, type) and issubclass(tp, Enum):
        if not isinstance(value, str):
            raise _Mismatch(_json_kind(value), tp.__name__)
        try:
            return tp(value)
        except ValueError:
            raise _Mismatch("string", tp.__name__) from None
    if tp is bool:
        if not isinstance(value, bool):
            raise _Mismatch(_json_kind(value), "bool")
        return value
    if tp is int:
        type_name = "uint" if unsigned else "int"
        if not isinstance(value, int) or isinstance(value, bool):
            raise _Mismatch(_json_kind(value), type_name)
        if unsigned and value < 0:
            raise _Mismatch(f"number {value}", type_name)
        return value
    if isinstance(tp, type) and issubclass(tp, str):
        if not isinstance(value, str):
            raise _Mismatch(_json_kind(value), "str")
        return value if tp is str else tp(value)
    if tp is timedelta:
        if not isinstance(value, int) or isinstance(value, bool):
            raise _Mismatch(_json_kind(value), "duration")
        return timedelta(microseconds=value // 1000)
    if tp is datetime:
        if not isinstance(value, str):
            raise _Mismatch(_json_kind(value), "time")
        return _parse_time(value)
    raise TypeError(f"unsupported field type {tp!r}")


def _decode_struct(data: dict, cls: type, path: str) -> Any:
    by_name = {key.lower(): value for key, value in data.items()}
    values: dict = {}
    for item in fields(cls):
        if item.name not in by_name:
            continue
        raw = by_name[item.name]
        tp = item.type
        if raw is None and not _is_optional(tp):
            continue
        field_path = f"{path}.{item.name}"
        try:
            values[item.name] = _decode(raw, tp, field_path, item.metadata.get("unsigned", False))
        except _Mismatch as exc:
            raise BindingError(
                f"json: cannot unmarshal {exc.kind} into field {field_path} of type {exc.type_name}"
            ) from None
    return cls(**values)


def _field_label(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


def _validate(instance: Any) -> None:
    problems = []
    cls_name = type(instance).__name__
    for item in fields(instance):
        if item.metadata.get("required") and not getattr(instance, item.name):
            label = _field_label(item.name)
            problems.append(
                f"Key: '{cls_name}.{label}' Error:Field validation for '{label}' failed on the 'required' tag"
            )
    if problems:
        raise BindingError("\n".join(problems))


def _syntax_message(text: str, error: json.JSONDecodeError) -> str:
    if error.pos >= len(text):
        return "unexpected EOF"
    char = text[error.pos]
    if error.pos == 0:
        return f"invalid character '{char}' looking for beginning of value"
    return f"invalid character '{char}' in JSON input at offset {error.pos}"


def bind_json(body: Union[bytes, str, None], model: type) -> Any:
    """Decode a JSON request body into ``model`` and check its required fields.

    Only the first JSON value of the body is read; unknown keys are ignored
    and key matching is case-insensitive.
    """
    if body is None:
        raise BindingError("invalid request")
    text = body.decode("utf-8", errors="replace") if isinstance(body, (bytes, bytearray)) else body
    text = text.lstrip(" \t\r\n")
    if not text:
        raise BindingError("EOF")
    try:
        data, _ = _DECODER.raw_decode(text)
    except json.JSONDecodeError as exc:
        raise BindingError(_syntax_message(text, exc)) from None
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise BindingError(
            f"json: cannot unmarshal {_json_kind(data)} into value of type {model.__name__}"
        )
    instance = _decode_struct(data, model, model.__name__)
    _validate(instance)
    return instance


# ---------------------------------------------------------------- encoding

_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _format_time(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset()
    if not offset:
        return text + "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


def _nanoseconds(span: timedelta) -> int:
    return ((span.days * 86400 + span.seconds) * 1_000_000 + span.microseconds) * 1000


def _to_plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, datetime):
        return _format_time(value)
    if isinstance(value, timedelta):
        return _nanoseconds(value)
    if is_dataclass(value) and not isinstance(value, type):
        return {item.name: _to_plain(getattr(value, item.name)) for item in fields(value)}
    if isinstance(value, dict):
        return {
            str(key): _to_plain(item)
            for key, item in sorted(value.items(), key=lambda pair: str(pair[0]))
        }
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    raise TypeError(f"cannot encode {type(value).__name__} as JSON")


def to_json(value: Any) -> str:
    """Encode a response value as compact JSON.

    Times are RFC 3339 strings, durations whole nanoseconds, mapping keys
    are sorted and HTML-sensitive characters are escaped.
    """
    text = json.dumps(_to_plain(value), separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    for char, escape in _ESCAPES:
        text = text.replace(char, escape)
    return text