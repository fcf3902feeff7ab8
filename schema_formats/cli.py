#!/usr/bin/env python3
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

"""CLI entry point for checking values against schema formats."""

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from .config import FormatsSettings, apply_format_config, load_format_config
from .exceptions import ConfigurationError
from .registry import FormatRegistry, FormatResult, new_default_registry

logger = logging.getLogger(__name__)

_VERDICTS = {
    FormatResult.SATISFIED: "valid",
    FormatResult.VIOLATED: "invalid",
    FormatResult.UNKNOWN: "unknown format",
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='schema-formats',
        description='Check values against JSON Schema string formats',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '--config',
        default=None,
        help='YAML file declaring extra formats, aliases and removals '
             '(default: $SCHEMA_FORMATS_CONFIG)',
    )
    parser.add_argument(
        '--output',
        choices=['human', 'json'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging',
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    check_parser = subparsers.add_parser('check', help='Check values against a format')
    check_parser.add_argument('format', help='Format name, e.g. email or date-time')
    check_parser.add_argument('values', nargs='+', help='Values to check')
    check_parser.add_argument(
        '--json',
        action='store_true',
        help='Decode every value as JSON before checking it',
    )

    subparsers.add_parser('list', help='List registered formats')
    return parser


def _load_registry(config_path: str) -> FormatRegistry:
    registry = new_default_registry()
    if config_path:
        apply_format_config(load_format_config(config_path), registry)
    return registry


def _decode_values(parser: argparse.ArgumentParser, raw_values: List[str], as_json: bool) -> List[Any]:
    if not as_json:
        return list(raw_values)
    values = []
    for raw in raw_values:
        try:
            values.append(json.loads(raw))
        except json.JSONDecodeError as e:
            parser.error(f"value {raw!r} is not valid JSON: {e}")
    return values


def _run_check(registry: FormatRegistry, args, values: List[Any]) -> int:
    results = [(value, registry.check(args.format, value)) for value in values]
    invalid = sum(1 for _, result in results if result is FormatResult.VIOLATED)

    if args.output == 'json':
        output = {
            'format': args.format,
            'known': registry.has(args.format),
            'invalid': invalid,
            'results': [
                {'value': value, 'result': result.value}
                for value, result in results
            ],
        }
        print(json.dumps(output, indent=2))
    else:
        for value, result in results:
            shown = json.dumps(value) if not isinstance(value, str) else value
            print(f"{shown}: {_VERDICTS[result]}")

    return 1 if invalid else 0


def _run_list(registry: FormatRegistry, args) -> int:
    names = registry.names()
    if args.output == 'json':
        print(json.dumps({'formats': names}, indent=2))
    else:
        for name in names:
            print(name)
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the schema-formats CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = FormatsSettings.from_env()
    if args.verbose:
        settings.log_level = 'DEBUG'
    if args.output == 'json':
        # stdout carries only the JSON document.
        settings.print_level = 'DEBUG'
    settings.set_logging()

    try:
        registry = _load_registry(args.config or settings.config_file)
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(2)

    if args.command == 'check':
        values = _decode_values(parser, args.values, args.json)
        sys.exit(_run_check(registry, args, values))
    sys.exit(_run_list(registry, args))


if __name__ == '__main__':
    main()
