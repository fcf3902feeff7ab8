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

"""Configuration for schema format checking.

Runtime settings come from environment variables. Extra formats can be
declared in a YAML file::

    formats:          # name -> regular expression (full match)
      sku: "[A-Z]{3}-[0-9]{4}"
    aliases:          # new name -> existing name
      url: uri
    remove:           # names to unbind
      - regex
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .checkers import PatternChecker
from .exceptions import ConfigurationError, RegistryError
from .registry import FormatRegistry
from .utils.logging_utils import configure_split_stream_logging, level_from_name

logger = logging.getLogger(__name__)

_KNOWN_SECTIONS = ("formats", "aliases", "remove")


@dataclass
class FormatsSettings:
    """Runtime settings for the schema format tools."""
    log_level: str = "INFO"
    print_level: str = "WARNING"
    config_file: str = ""

    @classmethod
    def from_env(cls) -> 'FormatsSettings':
        """Create settings from environment variables."""
        return cls(
            log_level=os.getenv('SCHEMA_FORMATS_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('SCHEMA_FORMATS_PRINT_LEVEL', 'WARNING'),
            config_file=os.getenv('SCHEMA_FORMATS_CONFIG', ''),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on the settings."""
        level = level_from_name(self.log_level, logging.INFO)
        stderr_level = level_from_name(self.print_level, logging.WARNING)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)

        return logging.getLogger('schema_formats')


@dataclass
class FormatConfig:
    """Registry changes declared in a format configuration file."""
    formats: Dict[str, str] = field(default_factory=dict)
    aliases: Dict[str, str] = field(default_factory=dict)
    remove: List[str] = field(default_factory=list)
    source: Optional[Path] = None


def _require_str_mapping(data: Dict[str, Any], section: str, origin: str) -> Dict[str, str]:
    value = data.get(section) or {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"{origin}: '{section}' must be a mapping, got {type(value).__name__}")
    for key, item in value.items():
        if not isinstance(key, str) or not key:
            raise ConfigurationError(f"{origin}: '{section}' keys must be non-empty strings, got {key!r}")
        if not isinstance(item, str):
            raise ConfigurationError(f"{origin}: '{section}.{key}' must be a string, got {type(item).__name__}")
    return dict(value)


def parse_format_config(data: Any, source: Optional[Path] = None) -> FormatConfig:
    """Validate the shape of a decoded configuration document.

    Raises:
        ConfigurationError: If a section has the wrong type or a pattern is invalid
    """
    origin = str(source) if source else "<format config>"
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{origin}: root must be a mapping, got {type(data).__name__}")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_SECTIONS)
    if unknown:
        raise ConfigurationError(f"{origin}: unknown section(s) {unknown}; expected {list(_KNOWN_SECTIONS)}")

    formats = _require_str_mapping(data, "formats", origin)
    aliases = _require_str_mapping(data, "aliases", origin)

    remove = data.get("remove") or []
    if not isinstance(remove, list) or not all(isinstance(name, str) for name in remove):
        raise ConfigurationError(f"{origin}: 'remove' must be a list of format names")

    for name, pattern in formats.items():
        try:
            PatternChecker(pattern)
        except RegistryError as e:
            raise ConfigurationError(f"{origin}: format '{name}': {e}") from e

    return FormatConfig(formats=formats, aliases=aliases, remove=list(remove), source=source)


def load_format_config(file_path: Union[str, Path]) -> FormatConfig:
    """Load a format configuration YAML file.

    Args:
        file_path: Path to the YAML file

    Returns:
        The parsed FormatConfig

    Raises:
        ConfigurationError: If the file cannot be read, parsed or validated
    """
    path = Path(file_path)

    if not path.exists():
        raise ConfigurationError(f"Format configuration file not found: {path}")

    if not path.is_file():
        raise ConfigurationError(f"Path is not a file: {path}")

    try:
        logger.debug(f"Loading format configuration file: {path}")
        with open(path, 'r', encoding='utf-8') as stream:
            data = yaml.safe_load(stream)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse YAML file {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigurationError(f"Failed to read format configuration file {path}: {exc}") from exc

    return parse_format_config(data, source=path)


def apply_format_config(config: FormatConfig, registry: FormatRegistry) -> FormatRegistry:
    """Apply *config* to *registry*: formats first, then aliases, then removals.

    Raises:
        ConfigurationError: If an alias targets a format that is not registered
    """
    for name, pattern in config.formats.items():
        registry.add(name, PatternChecker(pattern))

    for alias, target in config.aliases.items():
        checker = registry.get(target)
        if checker is None:
            raise ConfigurationError(f"Alias '{alias}' refers to unknown format '{target}'")
        registry.add(alias, checker)

    for name in config.remove:
        registry.remove(name)

    logger.debug(
        f"Applied format configuration {config.source or ''}: "
        f"{len(config.formats)} format(s), {len(config.aliases)} alias(es), {len(config.remove)} removal(s)"
    )
    return registry
