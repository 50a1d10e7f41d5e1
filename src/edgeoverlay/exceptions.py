# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
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

"""
Exception hierarchy for edgeoverlay.
"""

__all__ = [
    "EdgeOverlayError",
    "ConfigurationError",
    "MissingConfigurationError",
    "InvalidEndpointUriError",
    "PreconditionError",
    "UnsupportedModuleError",
    "DeploymentParseError",
]


class EdgeOverlayError(Exception):
    """Base class for edgeoverlay exceptions."""


class ConfigurationError(EdgeOverlayError):
    """Raised when a configuration value is unusable."""


class MissingConfigurationError(ConfigurationError):
    """Raised when a required configuration key has no value."""

    def __init__(self, key: str):
        super().__init__(f"Required configuration value '{key}' is not set")
        self.key = key


class InvalidEndpointUriError(ConfigurationError):
    """Raised when an endpoint URI cannot be parsed."""


class PreconditionError(EdgeOverlayError):
    """Raised when a provider is called with missing inputs."""


class UnsupportedModuleError(EdgeOverlayError):
    """Raised when a module targets a runtime this provider cannot handle."""


class DeploymentParseError(EdgeOverlayError):
    """Raised when a deployment manifest cannot be parsed."""
