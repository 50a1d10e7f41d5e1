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
Combined configuration providers for Docker modules.
"""
import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from ..exceptions import PreconditionError, UnsupportedModuleError
from ..MODELS.combined_config import AuthConfig, CombinedConfig
from ..MODELS.module import DOCKER_MODULE_TYPE, Module, RuntimeInfo
from ..REGISTRY.image_reference import ImageReference

logger = logging.getLogger(__name__)


class CombinedConfigProvider(ABC):
    """Produces the combined configuration for a module."""

    @abstractmethod
    def get_combined_config(self, module: Module, runtime_info: Optional[RuntimeInfo]) -> CombinedConfig:
        """
        Build the combined configuration for a module.

        Args:
            module: The module being deployed.
            runtime_info: The runtime the module is deployed to.
        """


class DockerCombinedConfigProvider(CombinedConfigProvider):
    """
    Combines a module's image and create options with the registry
    credentials that apply to its image.
    """

    def __init__(self, auth_configs: Optional[Iterable[AuthConfig]] = None):
        """
        Initialize the provider.

        Args:
            auth_configs: Credentials known to the agent itself. Runtime
                credentials from the deployment take precedence over these.
        """
        self.auth_configs: List[AuthConfig] = list(auth_configs or [])

    def get_combined_config(self, module: Module, runtime_info: Optional[RuntimeInfo]) -> CombinedConfig:
        if module is None:
            raise PreconditionError("module is required")
        if module.type.lower() != DOCKER_MODULE_TYPE:
            raise UnsupportedModuleError(
                f"Module {module.name} has type '{module.type}', expected '{DOCKER_MODULE_TYPE}'"
            )

        auth_config = self._find_auth_config(module.image, runtime_info)
        return CombinedConfig(image=module.image, create_spec=module.create_options, auth_config=auth_config)

    def _find_auth_config(self, image: str, runtime_info: Optional[RuntimeInfo]) -> Optional[AuthConfig]:
        """
        Find the first credential whose server address matches the image registry.
        """
        reference = ImageReference.parse(image)
        candidates = (runtime_info.auth_configs() if runtime_info is not None else []) + self.auth_configs
        for auth_config in candidates:
            if reference.matches_registry(auth_config.serveraddress):
                logger.debug("Using credentials for %s to pull %s", auth_config.serveraddress, reference)
                return auth_config
        return None
