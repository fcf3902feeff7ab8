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

"""Validation message codes and their English templates.

Each :class:`ErrorCode` is bound to a :class:`MessageTemplate` whose Jinja2
source uses exactly the declared parameters. The binding is checked when the
template is built, and the argument count is checked when it is rendered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Tuple

from jinja2 import Environment, StrictUndefined, Template, meta

from .exceptions import SchemaMessageError, TemplateArityError


STRING_NUMBER = "number"
STRING_ARRAY_OF_STRINGS = "array of strings"
STRING_ARRAY_OF_SCHEMAS = "array of schemas"
STRING_SCHEMA = "schema"
STRING_SCHEMA_OR_ARRAY_OF_STRINGS = "schema or array of strings"
STRING_PROPERTIES = "properties"
STRING_DEPENDENCY = "dependency"
STRING_PROPERTY = "property"

STRING_CONTEXT_ROOT = "(root)"
STRING_ROOT_SCHEMA_PROPERTY = "(root)"

STRING_UNDEFINED = "undefined"


_ENV = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)

_RESULT_ERROR_TEMPLATE = _ENV.from_string("{{ context }} : {{ description }}, given {{ value }}")


class ErrorCode(str, Enum):
    """Identifiers of validation problems, for use by clients."""

    ARRAY_MIN_ITEMS = "ARRAY_MIN_ITEMS"
    ARRAY_MAX_ITEMS = "ARRAY_MAX_ITEMS"
    ARRAY_MIN_PROPERTIES = "ARRAY_MIN_PROPERTIES"
    ARRAY_MAX_PROPERTIES = "ARRAY_MAX_PROPERTIES"
    ARRAY_NO_ADDITIONAL_ITEM = "ARRAY_NO_ADDITIONAL_ITEM"
    ADDITIONAL_PROPERTY_NOT_ALLOWED = "ADDITIONAL_PROPERTY_NOT_ALLOWED"
    DOES_NOT_MATCH_PATTERN = "DOES_NOT_MATCH_PATTERN"
    DOES_NOT_MATCH_FORMAT = "DOES_NOT_MATCH_FORMAT"
    HAS_DEPENDENCY_ON = "HAS_DEPENDENCY_ON"
    MULTIPLE_OF = "MULTIPLE_OF"
    GET_HTTP_BAD_STATUS = "GET_HTTP_BAD_STATUS"
    INVALID_PATTERN_PROPERTY = "INVALID_PATTERN_PROPERTY"
    INTERNAL = "INTERNAL"
    INVALID_REGEX_PATTERN = "INVALID_REGEX_PATTERN"
    MUST_MATCH_ONE_ENUM_VALUES = "MUST_MATCH_ONE_ENUM_VALUES"
    NUMBER_MUST_BE_LOWER_OR_EQUAL = "NUMBER_MUST_BE_LOWER_OR_EQUAL"
    NUMBER_MUST_BE_LOWER = "NUMBER_MUST_BE_LOWER"
    NUMBER_MUST_BE_GREATER_OR_EQUAL = "NUMBER_MUST_BE_GREATER_OR_EQUAL"
    NUMBER_MUST_BE_GREATER = "NUMBER_MUST_BE_GREATER"
    NUMBER_MUST_VALIDATE_ALLOF = "NUMBER_MUST_VALIDATE_ALLOF"
    NUMBER_MUST_VALIDATE_ONEOF = "NUMBER_MUST_VALIDATE_ONEOF"
    NUMBER_MUST_VALIDATE_ANYOF = "NUMBER_MUST_VALIDATE_ANYOF"
    NUMBER_MUST_VALIDATE_NOT = "NUMBER_MUST_VALIDATE_NOT"
    REFERENCE_X_MUST_BE_CANONICAL = "REFERENCE_X_MUST_BE_CANONICAL"
    STRING_LENGTH_MUST_BE_GREATER_OR_EQUAL = "STRING_LENGTH_MUST_BE_GREATER_OR_EQUAL"
    STRING_LENGTH_MUST_BE_LOWER_OR_EQUAL = "STRING_LENGTH_MUST_BE_LOWER_OR_EQUAL"
    MUST_BE_OF_TYPE_X = "MUST_BE_OF_TYPE_X"
    NEW_SCHEMA_DOCUMENT_INVALID_ARGUMENT = "NEW_SCHEMA_DOCUMENT_INVALID_ARGUMENT"
    X_IS_NOT_A_VALID_TYPE = "X_IS_NOT_A_VALID_TYPE"
    X_TYPE_IS_DUPLICATED = "X_TYPE_IS_DUPLICATED"
    X_MUST_BE_OF_TYPE_Y = "X_MUST_BE_OF_TYPE_Y"
    X_MUST_BE_A_Y = "X_MUST_BE_A_Y"
    X_MUST_BE_AN_Y = "X_MUST_BE_AN_Y"
    X_IS_MISSING_AND_REQUIRED = "X_IS_MISSING_AND_REQUIRED"
    X_MUST_BE_VALID_REGEX = "X_MUST_BE_VALID_REGEX"
    X_MUST_BE_GREATER_OR_TO_0 = "X_MUST_BE_GREATER_OR_TO_0"
    X_CANNOT_BE_GREATER_THAN_Y = "X_CANNOT_BE_GREATER_THAN_Y"
    X_MUST_BE_STRICTLY_GREATER_THAN_0 = "X_MUST_BE_STRICTLY_GREATER_THAN_0"
    X_CANNOT_BE_USED_WITHOUT_Y = "X_CANNOT_BE_USED_WITHOUT_Y"
    X_ITEMS_MUST_BE_UNIQUE = "X_ITEMS_MUST_BE_UNIQUE"
    X_ITEMS_MUST_BE_TYPE_Y = "X_ITEMS_MUST_BE_TYPE_Y"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Message:
    """A rendered validation message."""

    code: ErrorCode
    description: str

    def error(self) -> SchemaMessageError:
        """Return an exception holding the description."""
        return SchemaMessageError(self)

    def __str__(self) -> str:
        return self.description


@dataclass(frozen=True)
class MessageTemplate:
    """Binds an error code to a template with a fixed list of parameters."""

    code: ErrorCode
    source: str
    params: Tuple[str, ...] = ()
    _template: Template = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        used = meta.find_undeclared_variables(_ENV.parse(self.source))
        declared = set(self.params)
        if len(declared) != len(self.params):
            raise TemplateArityError(f"{self.code}: duplicate parameter names in {self.params}")
        if used != declared:
            raise TemplateArityError(
                f"{self.code}: template uses {sorted(used)} but declares {sorted(declared)}"
            )
        object.__setattr__(self, "_template", _ENV.from_string(self.source))

    @property
    def arity(self) -> int:
        return len(self.params)

    def render(self, *args: Any) -> Message:
        if len(args) != self.arity:
            raise TemplateArityError(
                f"{self.code} expects {self.arity} argument(s) {self.params}, got {len(args)}"
            )
        description = self._template.render(**dict(zip(self.params, args)))
        return Message(code=self.code, description=description)

    def __call__(self, *args: Any) -> Message:
        return self.render(*args)


def _bind(code: ErrorCode, source: str, *params: str) -> Tuple[ErrorCode, MessageTemplate]:
    return code, MessageTemplate(code, source, tuple(params))


MESSAGES: Mapping[ErrorCode, MessageTemplate] = dict([
    _bind(ErrorCode.X_IS_NOT_A_VALID_TYPE, "{{ type }} is not a valid type", "type"),
    _bind(ErrorCode.X_TYPE_IS_DUPLICATED, "{{ type }} type is duplicated", "type"),

    _bind(ErrorCode.X_MUST_BE_OF_TYPE_Y, "{{ x }} must be of type {{ y }}", "x", "y"),
    _bind(ErrorCode.X_MUST_BE_A_Y, "{{ x }} must be of a {{ y }}", "x", "y"),
    _bind(ErrorCode.X_MUST_BE_AN_Y, "{{ x }} must be of an {{ y }}", "x", "y"),

    _bind(ErrorCode.X_IS_MISSING_AND_REQUIRED, "{{ property }} is missing and required", "property"),
    _bind(ErrorCode.MUST_BE_OF_TYPE_X, "must be of type {{ type }}", "type"),
    _bind(ErrorCode.X_ITEMS_MUST_BE_UNIQUE, "{{ x }} items must be unique", "x"),
    _bind(ErrorCode.X_ITEMS_MUST_BE_TYPE_Y, "{{ x }} items must be {{ y }}", "x", "y"),
    _bind(ErrorCode.DOES_NOT_MATCH_PATTERN, "does not match pattern '{{ pattern }}'", "pattern"),
    _bind(ErrorCode.DOES_NOT_MATCH_FORMAT, "does not match format '{{ format }}'", "format"),
    _bind(ErrorCode.MUST_MATCH_ONE_ENUM_VALUES, "must match one of the enum values [{{ allowed }}]", "allowed"),

    _bind(ErrorCode.STRING_LENGTH_MUST_BE_GREATER_OR_EQUAL,
          "string length must be greater or equal to {{ min }}", "min"),
    _bind(ErrorCode.STRING_LENGTH_MUST_BE_LOWER_OR_EQUAL,
          "string length must be lower or equal to {{ max }}", "max"),

    _bind(ErrorCode.NUMBER_MUST_BE_LOWER_OR_EQUAL, "must be lower than or equal to {{ max }}", "max"),
    _bind(ErrorCode.NUMBER_MUST_BE_LOWER, "must be lower than {{ max }}", "max"),
    _bind(ErrorCode.NUMBER_MUST_BE_GREATER_OR_EQUAL, "must be greater than or equal to {{ min }}", "min"),
    _bind(ErrorCode.NUMBER_MUST_BE_GREATER, "must be greater than {{ min }}", "min"),

    _bind(ErrorCode.NUMBER_MUST_VALIDATE_ALLOF, "must validate all the schemas (allOf)"),
    _bind(ErrorCode.NUMBER_MUST_VALIDATE_ONEOF, "must validate one and only one schema (oneOf)"),
    _bind(ErrorCode.NUMBER_MUST_VALIDATE_ANYOF, "must validate at least one schema (anyOf)"),
    _bind(ErrorCode.NUMBER_MUST_VALIDATE_NOT, "must not validate the schema (not)"),

    _bind(ErrorCode.ARRAY_MIN_ITEMS, "array must have at least {{ min }} items", "min"),
    _bind(ErrorCode.ARRAY_MAX_ITEMS, "array must have at the most {{ max }} items", "max"),

    _bind(ErrorCode.ARRAY_MIN_PROPERTIES, "must have at least {{ min }} properties", "min"),
    _bind(ErrorCode.ARRAY_MAX_PROPERTIES, "must have at the most {{ max }} properties", "max"),

    _bind(ErrorCode.HAS_DEPENDENCY_ON, "has a dependency on {{ dependency }}", "dependency"),

    _bind(ErrorCode.MULTIPLE_OF, "must be a multiple of {{ multiple }}", "multiple"),

    _bind(ErrorCode.ARRAY_NO_ADDITIONAL_ITEM, "no additional item allowed on array"),

    _bind(ErrorCode.ADDITIONAL_PROPERTY_NOT_ALLOWED,
          'additional property "{{ property }}" is not allowed', "property"),
    _bind(ErrorCode.INVALID_PATTERN_PROPERTY,
          'property "{{ property }}" does not match pattern {{ pattern }}', "property", "pattern"),

    _bind(ErrorCode.INTERNAL, "internal error {{ error }}", "error"),

    _bind(ErrorCode.GET_HTTP_BAD_STATUS,
          "Could not read schema from HTTP, response status is {{ status }}", "status"),

    _bind(ErrorCode.NEW_SCHEMA_DOCUMENT_INVALID_ARGUMENT,
          "Invalid argument, must be a JSON string, a JSON reference string or a mapping"),

    _bind(ErrorCode.INVALID_REGEX_PATTERN, "Invalid regex pattern '{{ pattern }}'", "pattern"),
    _bind(ErrorCode.X_MUST_BE_VALID_REGEX, "{{ x }} must be a valid regex", "x"),

    _bind(ErrorCode.X_MUST_BE_GREATER_OR_TO_0, "{{ x }} must be greater than or equal to 0", "x"),

    _bind(ErrorCode.X_CANNOT_BE_GREATER_THAN_Y, "{{ x }} cannot be greater than {{ y }}", "x", "y"),

    _bind(ErrorCode.X_MUST_BE_STRICTLY_GREATER_THAN_0, "{{ x }} must be strictly greater than 0", "x"),

    _bind(ErrorCode.X_CANNOT_BE_USED_WITHOUT_Y, "{{ x }} cannot be used without {{ y }}", "x", "y"),

    _bind(ErrorCode.REFERENCE_X_MUST_BE_CANONICAL, "Reference {{ reference }} must be canonical", "reference"),
])


def get_template(code: ErrorCode) -> MessageTemplate:
    return MESSAGES[ErrorCode(code)]


def make_message(code: ErrorCode, *args: Any) -> Message:
    """Render the message bound to *code* with positional *args*.

    Raises:
        TemplateArityError: If the number of arguments does not match
        ValueError: If *code* is not a known error code
    """
    return get_template(code).render(*args)


def format_result_error(context: Any, description: Any, value: Any) -> str:
    """Format one result line as ``context : description, given value``."""
    return _RESULT_ERROR_TEMPLATE.render(context=context, description=description, value=value)


def template_table() -> Dict[str, Tuple[str, ...]]:
    """Return code -> parameter names for every bound template."""
    return {code.value: template.params for code, template in MESSAGES.items()}
