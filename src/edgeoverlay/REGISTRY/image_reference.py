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
Image reference parsing and registry matching.
Parses module images like 'edgeHub:1.4' or 'myacr.azurecr.io/sensor:1.0' so that
registry credentials can be matched to the registry an image is pulled from.
"""

from typing import Optional
from dataclasses import dataclass

# Addresses that all refer to Docker Hub in registry credentials
DOCKER_HUB_ADDRESSES = frozenset(
    {"docker.io", "index.docker.io", "registry-1.docker.io", "registry.hub.docker.com"}
)


def normalize_registry_address(address: str) -> str:
    """
    Strip scheme, path and trailing slashes from a registry address and lower-case it.

    Examples:
        - https://index.docker.io/v1/ -> index.docker.io
        - MyAcr.azurecr.io -> myacr.azurecr.io
    """
    value = address.strip().lower()
    if "://" in value:
        value = value.split("://", 1)[1]
    return value.split("/", 1)[0]


@dataclass
class ImageReference:
    """
    Parsed container image reference.

    Examples:
        - nginx -> docker.io/library/nginx:latest
        - myuser/myimage:v1 -> docker.io/myuser/myimage:v1
        - mcr.microsoft.com/azureiotedge-hub:1.4 -> mcr.microsoft.com/azureiotedge-hub:1.4
        - localhost:5000/image@sha256:abc123 -> localhost:5000/image@sha256:abc123
    """

    registry: str
    repository: str
    tag: Optional[str] = None
    digest: Optional[str] = None

    DEFAULT_REGISTRY = "docker.io"
    DEFAULT_TAG = "latest"

    @classmethod
    def parse(cls, reference: str) -> "ImageReference":
        """
        Parse an image reference string.

        Args:
            reference: Image reference string (e.g., 'nginx:latest', 'myuser/myimage:v1')

        Returns:
            Parsed ImageReference object.
        """
        if not reference or not reference.strip():
            raise ValueError("Empty image reference")
        reference = reference.strip()

        digest = None
        if "@" in reference:
            reference, digest = reference.rsplit("@", 1)

        tag = None
        last_colon = reference.rfind(":")
        if last_colon != -1:
            after_colon = reference[last_colon + 1 :]
            # A colon followed by a slash belongs to a registry port, not a tag
            if "/" not in after_colon:
                tag = after_colon
                reference = reference[:last_colon]

        parts = reference.split("/")
        first_part = parts[0]
        if len(parts) > 1 and ("." in first_part or ":" in first_part or first_part == "localhost"):
            registry = first_part
            repository = "/".join(parts[1:])
        else:
            registry = cls.DEFAULT_REGISTRY
            repository = reference if len(parts) > 1 else f"library/{reference}"

        if not tag and not digest:
            tag = cls.DEFAULT_TAG

        return cls(registry=registry, repository=repository, tag=tag, digest=digest)

    @property
    def full_name(self) -> str:
        """Get full image name with registry."""
        name = f"{self.registry}/{self.repository}"
        if self.digest:
            return f"{name}@{self.digest}"
        if self.tag:
            return f"{name}:{self.tag}"
        return name

    @property
    def is_docker_hub(self) -> bool:
        return self.registry.lower() in DOCKER_HUB_ADDRESSES

    def matches_registry(self, address: str) -> bool:
        """
        Check whether a credential's server address refers to this image's registry.

        Args:
            address: Server address from registry credentials.
        """
        if not address:
            return False
        normalized = normalize_registry_address(address)
        if self.is_docker_hub:
            return normalized in DOCKER_HUB_ADDRESSES
        return normalized == self.registry.lower()

    def __str__(self) -> str:
        return self.full_name
