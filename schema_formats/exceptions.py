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

"""Custom exceptions for the schema format checkers."""


class FormatsError(Exception):
    """Base exception for schema-format related errors."""
    pass


class RegistryError(FormatsError):
    """Exception raised for invalid format registrations."""
    pass


class ConfigurationError(FormatsError):
    """Exception raised for format configuration file errors."""
    pass


class TemplateArityError(FormatsError):
    """Exception raised when a message template and its arguments disagree."""
    pass


class SchemaMessageError(FormatsError):
    """Exception carrying a rendered validation message."""

    def __init__(self, message):
        super().__init__(message.description)
        self.message = message

    @property
    def code(self):
        return self.message.code
