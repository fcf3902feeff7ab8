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

"""Integration of format registries with the ``jsonschema`` validation engine."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional

import jsonschema
from jsonschema.validators import validator_for

from .messages import ErrorCode, Message, STRING_CONTEXT_ROOT, format_result_error, make_message
from .registry import FormatRegistry, default_registry

JsonPointer = str


@dataclass(frozen=True)
class FormatIssue:
    message: Message
    path: JsonPointer = ""
    value: Any = None

    def describe(self) -> str:
        context = self.path or STRING_CONTEXT_ROOT
        return format_result_error(context, self.message.description, json.dumps(self.value, default=str))


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _pointer(path: Iterable[Any]) -> JsonPointer:
    return "".join(f"/{_jp_escape(str(token))}" for token in path)


def _walk_errors(errors: Iterable[jsonschema.ValidationError]) -> Iterator[jsonschema.ValidationError]:
    # anyOf and oneOf keep their subschema failures in error.context.
    for error in errors:
        yield error
        yield from _walk_errors(error.context)


def _delegate(registry: FormatRegistry, name: str) -> Callable[[Any], bool]:
    def check(instance: Any) -> bool:
        # The format keyword only constrains strings.
        if not isinstance(instance, str):
            return True
        return registry.is_format(name, instance)

    check.__name__ = f"check_{name.replace('-', '_')}"
    return check


def build_format_checker(
    registry: Optional[FormatRegistry] = None,
    formats: Optional[Iterable[str]] = None,
) -> jsonschema.FormatChecker:
    """Build a ``jsonschema.FormatChecker`` backed by *registry*.

    Args:
        registry: Registry to delegate to (default: the process-wide registry)
        formats: Format names to expose (default: every registered name)

    Returns:
        A format checker to pass as ``format_checker`` to a jsonschema validator
    """
    if registry is None:
        registry = default_registry
    names = list(formats) if formats is not None else registry.names()

    checker = jsonschema.FormatChecker(formats=())
    for name in names:
        checker.checks(name)(_delegate(registry, name))
    return checker


def iter_format_messages(
    instance: Any,
    schema: dict,
    registry: Optional[FormatRegistry] = None,
) -> Iterator[FormatIssue]:
    """Validate *instance* against *schema* and yield its format failures.

    Failures nested under combinators such as ``anyOf`` are included. Errors
    from other keywords are left to the caller's own validation.
    """
    validator_cls = validator_for(schema)
    validator = validator_cls(schema, format_checker=build_format_checker(registry))
    for error in _walk_errors(validator.iter_errors(instance)):
        if error.validator != "format":
            continue
        yield FormatIssue(
            message=make_message(ErrorCode.DOES_NOT_MATCH_FORMAT, error.validator_value),
            path=_pointer(error.absolute_path),
            value=error.instance,
        )
