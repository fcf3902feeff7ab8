# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Built-in format checkers for JSON Schema ``format`` assertions.

Every checker is a stateless predicate over a decoded JSON value. Only
``str`` values can satisfy a format; anything else is rejected without
raising. Grammar patterns are compiled once at import time.

Covered grammars:
  * RFC3339 - ``date``, ``time``, ``date-time``
  * RFC3986 - ``uri``, ``uri-reference`` (and their ``iri`` aliases)
  * RFC5322 - ``email`` (and ``idn-email``)
  * RFC6570 - ``uri-template``
  * RFC6901 - ``json-pointer``, ``relative-json-pointer``
"""

from __future__ import annotations

import abc
import calendar
import ipaddress
import logging
import re
import warnings
from email.errors import NonASCIILocalPartDefect
from email.headerregistry import HeaderRegistry
from typing import Any, Callable, Dict, Optional, Union
from urllib.parse import SplitResult, urlsplit

from .exceptions import RegistryError

logger = logging.getLogger(__name__)


# ---- grammar patterns --------------------------------------------------------

_FULL_DATE = r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
_PARTIAL_TIME = r"(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})(?:\.[0-9]+)?"
_TIME_OFFSET = r"(?P<offset>[Zz]|[+-](?P<off_hour>[0-9]{2}):(?P<off_minute>[0-9]{2}))"

_RX_DATE = re.compile(_FULL_DATE)
_RX_TIME = re.compile(_PARTIAL_TIME + _TIME_OFFSET + "?")
_RX_DATE_TIME = re.compile(_FULL_DATE + "[Tt]" + _PARTIAL_TIME + _TIME_OFFSET)

_HOST_LABEL = r"[a-zA-Z0-9](?:[a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?"
_RX_HOSTNAME = re.compile(_HOST_LABEL + r"(?:\." + _HOST_LABEL + r")*")

_RX_UUID = re.compile(r"[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}")

_JSON_POINTER = r"(?:/(?:[^~/]|~0|~1)*)*"
_RX_JSON_POINTER = re.compile(_JSON_POINTER)
_RX_RELATIVE_JSON_POINTER = re.compile(r"(?:0|[1-9][0-9]*)(?:#|" + _JSON_POINTER + r")")

# Controls, space and backslash never appear in an RFC3986 reference.
_RX_URI_FORBIDDEN = re.compile(r"[\x00-\x20\x7f\\]")
_RX_URI_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

_MAX_HOSTNAME_LENGTH = 256

_HEADERS = HeaderRegistry()

# RFC5322 line length limit.
_EMAIL_MAX_LENGTH = 998


# ---- checker capability -------------------------------------------------------


class FormatChecker(abc.ABC):
    """A stateless predicate validating one value against one format."""

    @abc.abstractmethod
    def is_format(self, value: Any) -> bool:
        """Return True if *value* conforms to the format."""

    def __call__(self, value: Any) -> bool:
        return self.is_format(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class StringFormatChecker(FormatChecker):
    """Base for checkers whose grammar only applies to strings."""

    def is_format(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        return self.check_string(value)

    @abc.abstractmethod
    def check_string(self, value: str) -> bool:
        """Apply the grammar to a string value."""


class FunctionChecker(FormatChecker):
    """Wraps caller-supplied logic as a checker.

    By default non-string values are rejected before *func* is called, like
    the built-in checkers. Exceptions raised by *func* count as a failed check.
    """

    def __init__(self, func: Callable[[Any], Any], strings_only: bool = True):
        if not callable(func):
            raise RegistryError(f"Checker function must be callable, got {type(func).__name__}")
        self.func = func
        self.strings_only = strings_only

    def is_format(self, value: Any) -> bool:
        if self.strings_only and not isinstance(value, str):
            return False
        try:
            return bool(self.func(value))
        except Exception as e:
            logger.warning(f"Format function {self.func!r} raised on {value!r}: {e}")
            return False

    def __repr__(self) -> str:
        return f"FunctionChecker({self.func!r})"


class PatternChecker(StringFormatChecker):
    """Accepts strings fully matching a regular expression."""

    def __init__(self, pattern: Union[str, re.Pattern]):
        try:
            self.pattern = re.compile(pattern)
        except (re.error, TypeError) as e:
            raise RegistryError(f"Invalid format pattern {pattern!r}: {e}") from e

    def check_string(self, value: str) -> bool:
        return self.pattern.fullmatch(value) is not None

    def __repr__(self) -> str:
        return f"PatternChecker({self.pattern.pattern!r})"


# ---- helpers ------------------------------------------------------------------


def _days_in_month(year: int, month: int) -> int:
    if month == 2:
        return 29 if calendar.isleap(year) else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


def _valid_date_fields(match) -> bool:
    year = int(match.group("year"))
    month = int(match.group("month"))
    day = int(match.group("day"))
    if not 1 <= month <= 12:
        return False
    return 1 <= day <= _days_in_month(year, month)


def _valid_time_fields(match) -> bool:
    if int(match.group("hour")) > 23 or int(match.group("minute")) > 59:
        return False
    # 60 is a leap second
    if int(match.group("second")) > 60:
        return False
    if match.group("off_hour") is not None:
        if int(match.group("off_hour")) > 23 or int(match.group("off_minute")) > 59:
            return False
    return True


def _split_reference(value: str) -> Optional[SplitResult]:
    """Split *value* as a URI reference, or return None if it is malformed."""
    if _RX_URI_FORBIDDEN.search(value) or _RX_URI_BAD_ESCAPE.search(value):
        return None
    try:
        parts = urlsplit(value)
        # Raises ValueError for a non-numeric or out of range port.
        parts.port
    except ValueError:
        return None
    if not parts.scheme and not parts.netloc:
        # RFC3986 4.2: a relative path's first segment cannot contain ':'
        first_segment = parts.path.split("/", 1)[0]
        if ":" in first_segment:
            return None
    return parts


def _balanced_template_braces(path: str) -> bool:
    in_expression = False
    for char in path:
        if char == "{":
            if in_expression:
                return False
            in_expression = True
        elif char == "}":
            if not in_expression:
                return False
            in_expression = False
    return not in_expression


# ---- built-in checkers -------------------------------------------------------


class EmailFormatChecker(StringFormatChecker):
    """Verifies RFC5322 mailbox addresses, with or without a display name."""

    def check_string(self, value: str) -> bool:
        if not value or len(value) > _EMAIL_MAX_LENGTH:
            return False
        if "\r" in value or "\n" in value:
            return False
        try:
            header = _HEADERS("to", value)
        except Exception as e:  # header parser raises assorted errors
            logger.debug(f"Email parser rejected {value!r}: {e}")
            return False

        # Non-ASCII local parts are legal for idn-email.
        defects = [d for d in header.defects if not isinstance(d, NonASCIILocalPartDefect)]
        if defects:
            return False
        if len(header.groups) != 1 or header.groups[0].display_name is not None:
            return False
        if len(header.addresses) != 1:
            return False
        address = header.addresses[0]
        return bool(address.username) and bool(address.domain)


class IPV4FormatChecker(StringFormatChecker):
    """Verifies IP addresses in the IPv4 format."""

    def check_string(self, value: str) -> bool:
        if "%" in value:
            return False
        try:
            ipaddress.ip_address(value)
        except ValueError:
            return False
        return "." in value


class IPV6FormatChecker(StringFormatChecker):
    """Verifies IP addresses in the IPv6 format."""

    def check_string(self, value: str) -> bool:
        if "%" in value:
            return False
        try:
            ipaddress.ip_address(value)
        except ValueError:
            return False
        return ":" in value


class DateFormatChecker(StringFormatChecker):
    """Verifies full dates (``YYYY-MM-DD``) per RFC3339 5.6.

    The day is checked against the month length, including leap years.
    """

    def check_string(self, value: str) -> bool:
        match = _RX_DATE.fullmatch(value)
        return match is not None and _valid_date_fields(match)


class TimeFormatChecker(StringFormatChecker):
    """Verifies times (``HH:MM:SS`` with optional fraction and offset).

    Valid formats:
        Partial Time: HH:MM:SS[.frac]
        Full Time:    HH:MM:SS[.frac]Z or HH:MM:SS[.frac]+07:00

    Seconds range over 00-60 so that leap seconds are accepted.
    """

    def check_string(self, value: str) -> bool:
        match = _RX_TIME.fullmatch(value)
        return match is not None and _valid_time_fields(match)


class DateTimeFormatChecker(StringFormatChecker):
    """Verifies date/time formats per RFC3339 5.6.

    Valid formats:
        Partial Time: HH:MM:SS
        Full Date:    YYYY-MM-DD
        Full Time:    HH:MM:SSZ or HH:MM:SS-07:00
        Date Time:    YYYY-MM-DDTHH:MM:SS[.frac]Z or with a numeric offset

    A date-time must carry an offset. Fractional seconds are accepted in all
    formats that carry a time.
    """

    def check_string(self, value: str) -> bool:
        match = _RX_DATE_TIME.fullmatch(value)
        if match is not None:
            return _valid_date_fields(match) and _valid_time_fields(match)
        match = _RX_DATE.fullmatch(value)
        if match is not None:
            return _valid_date_fields(match)
        match = _RX_TIME.fullmatch(value)
        return match is not None and _valid_time_fields(match)


class URIFormatChecker(StringFormatChecker):
    """Validates a URI with a non-empty scheme per RFC3986."""

    def check_string(self, value: str) -> bool:
        parts = _split_reference(value)
        return parts is not None and bool(parts.scheme)


class URIReferenceFormatChecker(StringFormatChecker):
    """Validates a URI or relative-reference per RFC3986."""

    def check_string(self, value: str) -> bool:
        return _split_reference(value) is not None


class URITemplateFormatChecker(StringFormatChecker):
    """Validates a URI template per RFC6570.

    The value must be a URI reference whose path holds balanced, non-nested
    ``{...}`` expressions. Query and fragment are not scanned.
    """

    def check_string(self, value: str) -> bool:
        parts = _split_reference(value)
        if parts is None:
            return False
        return _balanced_template_braces(parts.path)


class HostnameFormatChecker(StringFormatChecker):
    """Validates a hostname made of dot-separated 1-63 character labels."""

    def check_string(self, value: str) -> bool:
        return len(value) < _MAX_HOSTNAME_LENGTH and _RX_HOSTNAME.fullmatch(value) is not None


class UUIDFormatChecker(StringFormatChecker):
    """Validates a lowercase, canonical 8-4-4-4-12 UUID."""

    def check_string(self, value: str) -> bool:
        return _RX_UUID.fullmatch(value) is not None


class RegexFormatChecker(StringFormatChecker):
    """Validates a regular expression compiles. The empty string is valid."""

    def check_string(self, value: str) -> bool:
        if value == "":
            return True
        try:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore")
                re.compile(value)
        except (re.error, OverflowError, RecursionError):
            return False
        return True


class JSONPointerFormatChecker(StringFormatChecker):
    """Validates a JSON Pointer per RFC6901."""

    def check_string(self, value: str) -> bool:
        return _RX_JSON_POINTER.fullmatch(value) is not None


class RelativeJSONPointerFormatChecker(StringFormatChecker):
    """Validates a relative JSON Pointer."""

    def check_string(self, value: str) -> bool:
        return _RX_RELATIVE_JSON_POINTER.fullmatch(value) is not None


def builtin_checkers() -> Dict[str, FormatChecker]:
    """Return a fresh name -> checker mapping of the built-in formats.

    Aliases share one checker instance.
    """
    email = EmailFormatChecker()
    uri = URIFormatChecker()
    uri_reference = URIReferenceFormatChecker()
    return {
        "date": DateFormatChecker(),
        "time": TimeFormatChecker(),
        "date-time": DateTimeFormatChecker(),
        "hostname": HostnameFormatChecker(),
        "email": email,
        "idn-email": email,
        "ipv4": IPV4FormatChecker(),
        "ipv6": IPV6FormatChecker(),
        "uri": uri,
        "uri-reference": uri_reference,
        "iri": uri,
        "iri-reference": uri_reference,
        "uri-template": URITemplateFormatChecker(),
        "uuid": UUIDFormatChecker(),
        "regex": RegexFormatChecker(),
        "json-pointer": JSONPointerFormatChecker(),
        "relative-json-pointer": RelativeJSONPointerFormatChecker(),
    }
