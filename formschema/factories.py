"""
Factory functions that return schema instances.

Names that would shadow builtins carry a trailing underscore.
"""

from __future__ import annotations

from typing import Any, Iterable, Literal, Mapping

from .composites import ArraySchema, ObjectSchema, RecordSchema, UnionSchema
from .config import UnknownKeys
from .formats import (
    DateSchema,
    DatetimeLocalSchema,
    EmailSchema,
    GUIDSchema,
    HexColorSchema,
    HTMLSchema,
    IPAddressSchema,
    ISODateSchema,
    JSONTextSchema,
    MacAddressSchema,
    PasswordSchema,
    PhoneNumberSchema,
    StreetAddressSchema,
    StringNumberSchema,
    UrlSchema,
    UUIDSchema,
    XMLSchema,
    ZipCodeSchema,
)
from .primitives import (
    AnySchema,
    BooleanSchema,
    EnumSchema,
    NeverSchema,
    NumberSchema,
    StringSchema,
    UnknownSchema,
)

# String


def string() -> StringSchema:
    return StringSchema(description="A string field")


def email() -> EmailSchema:
    return EmailSchema(description="An email field")


def url() -> UrlSchema:
    return UrlSchema(description="A URL field")


def uuid() -> UUIDSchema:
    return UUIDSchema(description="A UUID field")


def guid() -> GUIDSchema:
    return GUIDSchema(description="A GUID field")


def zip_code() -> ZipCodeSchema:
    return ZipCodeSchema(description="A zip code field")


def hex_color() -> HexColorSchema:
    return HexColorSchema(description="A hex color field")


def mac_address() -> MacAddressSchema:
    return MacAddressSchema(description="A MAC address field")


def ip(version: Literal["IPV4", "IPV6"] = "IPV4") -> IPAddressSchema:
    return IPAddressSchema(
        version, description=f"An IP address field for version {version}"
    )


def phone_number() -> PhoneNumberSchema:
    return PhoneNumberSchema(description="A phone number field")


def date() -> DateSchema:
    return DateSchema(description="A date field")


def datetime() -> DatetimeLocalSchema:
    return DatetimeLocalSchema(description="A datetime-local field")


def iso_date() -> ISODateSchema:
    return ISODateSchema(description="An ISO date field")


def string_number() -> StringNumberSchema:
    return StringNumberSchema(description="A string number field")


def password() -> PasswordSchema:
    return PasswordSchema(description="A password field")


def json_text() -> JSONTextSchema:
    return JSONTextSchema(description="A JSON field")


def xml() -> XMLSchema:
    return XMLSchema(description="An XML field")


def html() -> HTMLSchema:
    return HTMLSchema(description="An HTML field")


def street_address() -> StreetAddressSchema:
    return StreetAddressSchema(description="A street address field")


# Number / Boolean


def number() -> NumberSchema:
    return NumberSchema()


def boolean() -> BooleanSchema:
    return BooleanSchema()


# Containers


def object_(
    shape: Mapping[str, Any], *, unknown_keys: UnknownKeys | str | None = None
) -> ObjectSchema:
    """
    Object with a fixed shape.

    Usage:
        object_({"name": string(), "age": number().min(0)})
        object_({"name": str}, unknown_keys="reject")
    """
    return ObjectSchema(shape, unknown_keys=unknown_keys)


def array(items: Any) -> ArraySchema:
    return ArraySchema(items)


def record(values: Any, keys: Any = None) -> RecordSchema:
    """
    Map with dynamic keys.

    Usage:
        record(number())                            # any non-empty string key
        record(number(), keys=string().pattern(r"^[a-z_]+$"))
    """
    return RecordSchema(values, keys)


def union(options: Iterable[Any]) -> UnionSchema:
    return UnionSchema(options)


# Misc


def enum_(values: Iterable[Any]) -> EnumSchema:
    return EnumSchema(values)


def any_() -> AnySchema:
    return AnySchema()


def unknown() -> UnknownSchema:
    return UnknownSchema()


def never() -> NeverSchema:
    return NeverSchema()
