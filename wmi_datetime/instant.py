"""
The WMIDateTime value type and its decode/encode adapters.

WMIDateTime wraps an offset-aware ``datetime`` produced from a CIM
datetime string. Pipeline:

    decode(value) -> parse_fields() -> normalize_subsecond() -> backend.build()
    encode(instant) -> backend.format_rfc3339()

pydantic integration: WMIDateTime can be used directly as a model field
type. Strings are parsed on validation; serialization (python and JSON
mode) emits the RFC3339 string.

Example::

    class Process(BaseModel):
        name: str
        creation_date: WMIDateTime

    p = Process.model_validate(
        {"name": "svchost.exe", "creation_date": "20190113200517.500000-180"}
    )
    p.model_dump_json()
    # '{"name":"svchost.exe","creation_date":"2019-01-13T20:05:17.000500-03:00"}'
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import PydanticCustomError, core_schema

from wmi_datetime.backends import DateTimeBackend, get_backend
from wmi_datetime.exceptions import EXPECTED_SHAPE, InternalFormattingError, TypeMismatchError
from wmi_datetime.parser import parse_fields


@dataclass(frozen=True)
class WMIDateTime:
    """An offset-aware instant parsed from a CIM datetime string.

    Attributes:
        value: The instant as an offset-aware ``datetime`` (a
            ``pandas.Timestamp`` when built by the pandas backend).
    """

    value: datetime

    def __post_init__(self) -> None:
        if self.value.utcoffset() is None:
            raise InternalFormattingError(
                f"WMIDateTime requires an offset-aware datetime, got {self.value!r}"
            )
        if self.value.utcoffset().total_seconds() % 60:
            raise InternalFormattingError(
                f"WMIDateTime requires a whole-minute UTC offset, got {self.value.utcoffset()}"
            )

    @classmethod
    def parse(
        cls, text: str, backend: str | DateTimeBackend | None = None
    ) -> WMIDateTime:
        """Parse a CIM datetime string such as ``"20190113200517.500000-180"``.

        Raises:
            MalformedInputError: If *text* is shorter than 21 characters.
            InvalidOffsetError: If the offset tail is invalid.
            InvalidDateTimeComponentError: If a date/time field is invalid.
        """
        fields = parse_fields(text)
        return cls(get_backend(backend).build(fields))

    from_str = parse

    # -- Field accessors ------------------------------------------------------

    @property
    def year(self) -> int:
        return self.value.year

    @property
    def month(self) -> int:
        return self.value.month

    @property
    def day(self) -> int:
        return self.value.day

    @property
    def hour(self) -> int:
        return self.value.hour

    @property
    def minute(self) -> int:
        return self.value.minute

    @property
    def second(self) -> int:
        return self.value.second

    @property
    def microsecond(self) -> int:
        return self.value.microsecond

    @property
    def offset_minutes(self) -> int:
        """UTC offset in whole minutes (east of UTC is positive)."""
        return int(self.value.utcoffset().total_seconds()) // 60

    # -- Formatting -----------------------------------------------------------

    def to_datetime(self) -> datetime:
        return self.value

    def to_rfc3339(self, backend: str | DateTimeBackend | None = None) -> str:
        """Format as ``YYYY-MM-DDTHH:MM:SS.ffffff+HH:MM``.

        Always six fractional digits and an explicit numeric offset;
        a zero offset is written ``+00:00``, never ``Z``.
        """
        return get_backend(backend).format_rfc3339(self.value)

    def __str__(self) -> str:
        return self.to_rfc3339()

    # -- pydantic hooks -------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                encode, return_schema=core_schema.str_schema()
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, _core_schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {"type": "string", "description": EXPECTED_SHAPE}

    @classmethod
    def _validate(cls, value: Any) -> WMIDateTime:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise PydanticCustomError(
                "wmi_datetime_type",
                "Input should be {expected}",
                {"expected": EXPECTED_SHAPE},
            )
        # Parser errors are ValueErrors; pydantic reports them with their message
        return cls.parse(value)


def decode(value: object, backend: str | DateTimeBackend | None = None) -> WMIDateTime:
    """Decode a single scalar into a WMIDateTime.

    Args:
        value: Must be a ``str``. Numbers, booleans, bytes, ``None`` and
            containers are rejected.
        backend: Backend name or instance (default: stdlib).

    Raises:
        TypeMismatchError: If *value* is not a string.
        WMIDateTimeError: Any parser failure, carrying its message.
    """
    if not isinstance(value, str):
        raise TypeMismatchError(value)
    return WMIDateTime.parse(value, backend)


def encode(value: WMIDateTime) -> str:
    """Encode a WMIDateTime as its canonical RFC3339 string."""
    return value.to_rfc3339()
