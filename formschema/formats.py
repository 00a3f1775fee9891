"""
Fixed string formats. Each is a StringSchema with a predefined pattern.
"""

from __future__ import annotations

import json
import re
from typing import Any, ClassVar, Literal

from .context import ValidationContext
from .errors import ErrorCode, ValidationError
from .primitives import StringSchema
from .types import Err, ValidationResult

_OCTET = r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"


class EmailSchema(StringSchema):
    type_name: ClassVar[str] = "email"
    format_pattern = re.compile(
        r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
        r"@(?:[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?\.)+"
        r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?$"
    )
    format_title = "Email must be a valid email address e.g., example@example.com"
    format_placeholder = "example@example.com"


class UrlSchema(StringSchema):
    type_name: ClassVar[str] = "url"
    format_pattern = re.compile(
        r"^[a-z][a-z0-9+\-.]*://"  # scheme
        r"(?:[^\s:@/]+(?::[^\s@/]*)?@)?"  # userinfo
        r"(?:\[[0-9a-f:.]+\]|[a-z0-9\-._~%]+)"  # host
        r"(?::[0-9]+)?"  # port
        r"(?:/[^\s?#]*)*"  # path
        r"(?:\?[^\s#]*)?"  # query
        r"(?:#\S*)?$",  # fragment
        re.IGNORECASE,
    )
    format_title = "URL must be a valid web address e.g., https://example.com"
    format_placeholder = "https://example.com"


class UUIDSchema(StringSchema):
    format_pattern = re.compile(
        r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-5][0-9a-f]{3}-[089ab][0-9a-f]{3}-[0-9a-f]{12}$",
        re.IGNORECASE,
    )
    format_title = "UUID must be in the format 550e8400-e29b-41d4-a716-446655440000"
    format_placeholder = "550e8400-e29b-41d4-a716-446655440000"


class GUIDSchema(StringSchema):
    format_pattern = re.compile(
        r"^\{?[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}\}?$"
    )
    format_title = "GUID must be in the format 550e8400-e29b-41d4-a716-446655440000"
    format_placeholder = "550e8400-e29b-41d4-a716-446655440000"


class ZipCodeSchema(StringSchema):
    format_pattern = re.compile(r"^[0-9]{5}(?:-[0-9]{4})?$")
    format_title = "Zip code must be in the format 12345 or 12345-6789"
    format_placeholder = "12345 or 12345-6789"


class HexColorSchema(StringSchema):
    type_name: ClassVar[str] = "color"
    format_pattern = re.compile(r"^#(?:[a-fA-F0-9]{6}|[a-fA-F0-9]{3})$")
    format_title = "Hex color must be in the format #RRGGBB or #RGB"
    format_placeholder = "#RRGGBB or #RGB"


class MacAddressSchema(StringSchema):
    format_pattern = re.compile(r"^(?:[0-9A-Fa-f]{2}[:-]){5}[0-9A-Fa-f]{2}$")
    format_title = "MAC address must be in the format 00:1A:2B:3C:4D:5E"
    format_placeholder = "00:1A:2B:3C:4D:5E"


class PhoneNumberSchema(StringSchema):
    type_name: ClassVar[str] = "tel"
    format_pattern = re.compile(
        r"^\+?\d{1,4}?[-.\s]?\(?\d{1,3}?\)?[-.\s]?\d{1,4}[-.\s]?\d{1,4}[-.\s]?\d{1,9}$"
    )
    format_title = "Phone number must be in a valid international format"
    format_placeholder = "+12345678900"


class DateSchema(StringSchema):
    type_name: ClassVar[str] = "date"
    format_pattern = re.compile(
        r"^(0[1-9]|1[0-2])/(0[1-9]|[12][0-9]|3[01])/(19|20)\d\d$"
    )
    format_title = "Date must be in the format MM/DD/YYYY"
    format_placeholder = "MM/DD/YYYY"


class DatetimeLocalSchema(StringSchema):
    type_name: ClassVar[str] = "datetime-local"
    format_pattern = re.compile(
        r"^(?:19|20)[0-9]{2}-(?:0[1-9]|1[0-2])-(?:0[1-9]|[12][0-9]|3[01])"
        r"T(?:[01][0-9]|2[0-3]):[0-5][0-9]$"
    )
    format_title = "Datetime must be in the format YYYY-MM-DDTHH:MM"
    format_placeholder = "YYYY-MM-DDTHH:MM"


class ISODateSchema(StringSchema):
    format_pattern = re.compile(
        r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d*)?(?:[+-]\d{2}:\d{2}|Z)?$"
    )
    format_title = "ISO date must be in the format YYYY-MM-DDTHH:MM:SSZ"
    format_placeholder = "YYYY-MM-DDTHH:MM:SSZ"


class StringNumberSchema(StringSchema):
    format_pattern = re.compile(
        r"^-?(?:0|[1-9](?:\d{0,2}(?:,\d{3})+|\d*))(?:\.\d+)?$"
    )
    format_title = "String number must be a valid numeric format"
    format_placeholder = "12345"


class StreetAddressSchema(StringSchema):
    format_pattern = re.compile(
        r"^\d+ [a-zA-Z0-9\s]+,? [a-zA-Z]+,? [A-Z]{2} [0-9]{5,6}$"
    )
    format_title = "Street address must be in the format '1234 Main St, City, ST 12345'"
    format_placeholder = "1234 Main St, City, ST 12345"


class XMLSchema(StringSchema):
    """Text containing at least one <tag>value</tag> element."""

    format_pattern = re.compile(
        r"<([A-Za-z_][\w.:-]*)(?:\s[^<>]*)?>.*?</\1\s*>", re.DOTALL
    )
    format_title = "XML content must be enclosed within <TAG>value</TAG>"
    format_placeholder = "<TAG>value</TAG>"


class HTMLSchema(StringSchema):
    """Text containing at least one HTML tag."""

    format_pattern = re.compile(r"""<(?:"[^"]*"['"]*|'[^']*'['"]*|[^'">])+>""")
    format_title = "HTML content must be valid HTML tags"
    format_placeholder = "<tag>content</tag>"


class PasswordSchema(StringSchema):
    type_name: ClassVar[str] = "password"


class IPAddressSchema(StringSchema):
    patterns: ClassVar[dict[str, re.Pattern[str]]] = {
        "IPV4": re.compile(rf"^{_OCTET}\.{_OCTET}\.{_OCTET}\.{_OCTET}$"),
        "IPV6": re.compile(
            r"^(?:"
            r"(?:[0-9a-fA-F]{1,4}:){7}[0-9a-fA-F]{1,4}"
            r"|(?:[0-9a-fA-F]{1,4}:){1,7}:"
            r"|(?:[0-9a-fA-F]{1,4}:){1,6}:[0-9a-fA-F]{1,4}"
            r"|(?:[0-9a-fA-F]{1,4}:){1,5}(?::[0-9a-fA-F]{1,4}){1,2}"
            r"|(?:[0-9a-fA-F]{1,4}:){1,4}(?::[0-9a-fA-F]{1,4}){1,3}"
            r"|(?:[0-9a-fA-F]{1,4}:){1,3}(?::[0-9a-fA-F]{1,4}){1,4}"
            r"|(?:[0-9a-fA-F]{1,4}:){1,2}(?::[0-9a-fA-F]{1,4}){1,5}"
            r"|[0-9a-fA-F]{1,4}:(?::[0-9a-fA-F]{1,4}){1,6}"
            r"|:(?:(?::[0-9a-fA-F]{1,4}){1,7}|:)"
            r")$"
        ),
    }
    placeholders: ClassVar[dict[str, str]] = {
        "IPV4": "255.255.255.255",
        "IPV6": "2001:0db8:85a3:0000:0000:8a2e:0370:7334",
    }

    def __init__(
        self, version: Literal["IPV4", "IPV6"] = "IPV4", description: str | None = None
    ):
        super().__init__(description)
        if version not in self.patterns:
            raise ValueError(f"IP version must be IPV4 or IPV6, got {version!r}")
        self.version = version
        self._pattern = self.patterns[version]
        self._attributes["placeholder"] = self.placeholders[version]
        self._attributes["title"] = (
            f"IP address must be in the format {self.placeholders[version]}"
        )


class JSONTextSchema(StringSchema):
    """String holding a JSON document."""

    type_name: ClassVar[str] = "json"
    format_title = "JSON must be valid JSON format"
    format_placeholder = '{"key":"value"}'

    def validate(self, data: Any, ctx: ValidationContext) -> ValidationResult:
        result = super().validate(data, ctx)
        if isinstance(result, Err):
            return result
        try:
            json.loads(data)
        except ValueError:
            return Err(
                [
                    ValidationError(
                        path=(),
                        message=self._messages.get("pattern", "Invalid JSON format"),
                        code=ErrorCode.INVALID_JSON,
                        expected="valid JSON",
                        received=data,
                        value=data,
                    )
                ]
            )
        return result
