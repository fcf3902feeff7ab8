"""Named string formats for JSON Schema validation.

Usage:
    from schema_formats import default_registry

    default_registry.is_format("email", "a@b.com")        # True
    default_registry.is_format("no-such-format", 42)      # True, unknown formats pass
    default_registry.add("sku", PatternChecker(r"[A-Z]{3}-[0-9]{4}"))
"""

from .checkers import (
    DateFormatChecker,
    DateTimeFormatChecker,
    EmailFormatChecker,
    FormatChecker,
    FunctionChecker,
    HostnameFormatChecker,
    IPV4FormatChecker,
    IPV6FormatChecker,
    JSONPointerFormatChecker,
    PatternChecker,
    RegexFormatChecker,
    RelativeJSONPointerFormatChecker,
    StringFormatChecker,
    TimeFormatChecker,
    URIFormatChecker,
    URIReferenceFormatChecker,
    URITemplateFormatChecker,
    UUIDFormatChecker,
    builtin_checkers,
)
from .exceptions import (
    ConfigurationError,
    FormatsError,
    RegistryError,
    SchemaMessageError,
    TemplateArityError,
)
from .messages import ErrorCode, Message, MessageTemplate, make_message
from .registry import FormatRegistry, FormatResult, default_registry, is_format, new_default_registry

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "DateFormatChecker",
    "DateTimeFormatChecker",
    "EmailFormatChecker",
    "ErrorCode",
    "FormatChecker",
    "FormatRegistry",
    "FormatResult",
    "FormatsError",
    "FunctionChecker",
    "HostnameFormatChecker",
    "IPV4FormatChecker",
    "IPV6FormatChecker",
    "JSONPointerFormatChecker",
    "Message",
    "MessageTemplate",
    "PatternChecker",
    "RegexFormatChecker",
    "RegistryError",
    "RelativeJSONPointerFormatChecker",
    "SchemaMessageError",
    "StringFormatChecker",
    "TemplateArityError",
    "TimeFormatChecker",
    "URIFormatChecker",
    "URIReferenceFormatChecker",
    "URITemplateFormatChecker",
    "UUIDFormatChecker",
    "builtin_checkers",
    "default_registry",
    "is_format",
    "make_message",
    "new_default_registry",
]
