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
Endpoint URI parsing.
Parses workload/management endpoint URIs like 'unix:///var/run/iotedge/workload.sock'
or 'http://localhost:15580' and derives bind-mount paths for local sockets.
"""

import posixpath
import re
from dataclasses import dataclass
from pathlib import PureWindowsPath
from urllib.parse import unquote, urlsplit

from ..exceptions import InvalidEndpointUriError
from .platform import BindPathPolicy

UNIX_SCHEME = "unix"

# unix:///C:/ProgramData/iotedge/workload.sock has path /C:/ProgramData/...
_DRIVE_PATH = re.compile(r"^/?([A-Za-z]:[/\\].*)$")


@dataclass(frozen=True)
class EndpointUri:
    """
    Parsed endpoint URI.

    Examples:
        - unix:///var/run/iotedge/mgmt.sock -> scheme 'unix', path '/var/run/iotedge/mgmt.sock'
        - http://localhost:15580 -> scheme 'http', path ''
    """

    scheme: str
    path: str

    @classmethod
    def parse(cls, value: str) -> "EndpointUri":
        """
        Parse an absolute endpoint URI.

        Args:
            value: URI string.

        Returns:
            Parsed EndpointUri with a lower-cased scheme and an unescaped path.

        Raises:
            InvalidEndpointUriError: If the value is empty, relative or malformed.
        """
        if value is None or not value.strip():
            raise InvalidEndpointUriError("Empty endpoint URI")

        try:
            parts = urlsplit(value.strip())
        except ValueError as e:
            raise InvalidEndpointUriError(f"Malformed endpoint URI '{value}': {e}") from e

        if not parts.scheme:
            raise InvalidEndpointUriError(f"Endpoint URI '{value}' is not absolute")

        return cls(scheme=parts.scheme.lower(), path=unquote(parts.path))

    @property
    def is_local_transport(self) -> bool:
        """True when the endpoint is a Unix domain socket."""
        return self.scheme == UNIX_SCHEME

    def bind_path(self, policy: BindPathPolicy) -> str:
        """
        Get the host path to bind-mount for this endpoint.

        Args:
            policy: Whether to mount the socket file or its parent directory.
        """
        if policy == BindPathPolicy.PARENT_DIRECTORY:
            match = _DRIVE_PATH.match(self.path)
            if match:
                return str(PureWindowsPath(match.group(1)).parent)
            return posixpath.dirname(self.path)
        return self.path

    def __str__(self) -> str:
        return f"{self.scheme}://{self.path}"
