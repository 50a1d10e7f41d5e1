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
Combined configuration provider for modules running in a cluster.
Applies socket mounts and network aliases on top of a base provider.
"""
import logging
from typing import Optional

from ..CONFIG.config_source import ConfigSource
from ..CONFIG.settings import OverlaySettings
from ..exceptions import PreconditionError
from ..MODELS.combined_config import CombinedConfig
from ..MODELS.module import Module, RuntimeInfo
from ..OVERLAYS.network_aliases import NetworkAliasOverlay
from ..OVERLAYS.socket_mounts import SocketMountOverlay
from ..OVERLAYS.spec_cloner import clone_create_spec
from .base_provider import CombinedConfigProvider

logger = logging.getLogger(__name__)


class ClusterCombinedConfigProvider(CombinedConfigProvider):
    """
    Wraps a base provider and adjusts its create options for the cluster.
    The base provider's objects are never mutated.
    """

    def __init__(self,
                 base_provider: CombinedConfigProvider,
                 config_source: ConfigSource,
                 settings: Optional[OverlaySettings] = None):
        """
        Initialize the provider.

        Args:
            base_provider: Source of the unmodified combined configuration.
            config_source: Source for endpoint URIs, network id and hostname.
            settings: Overlay settings; built from config_source when omitted.
        """
        if base_provider is None:
            raise PreconditionError("base_provider is required")
        if config_source is None:
            raise PreconditionError("config_source is required")

        self.base_provider = base_provider
        self.config_source = config_source
        self.settings = settings if settings is not None else OverlaySettings.from_config(config_source)
        self.socket_mounts = SocketMountOverlay(config_source, self.settings)
        self.network_aliases = NetworkAliasOverlay(config_source, self.settings)

    def get_combined_config(self, module: Module, runtime_info: Optional[RuntimeInfo]) -> CombinedConfig:
        """
        Build the combined configuration with cluster overlays applied.

        Args:
            module: The module being deployed.
            runtime_info: The runtime the module is deployed to.

        Returns:
            A new CombinedConfig with the base image and auth and the adjusted create options.

        Raises:
            PreconditionError: If module is missing or the base provider returns nothing.
        """
        if module is None:
            raise PreconditionError("module is required")

        combined_config = self.base_provider.get_combined_config(module, runtime_info)
        if combined_config is None:
            raise PreconditionError(f"Base provider returned no configuration for module {module.name}")

        create_spec = clone_create_spec(combined_config.create_spec)
        self.socket_mounts.apply(create_spec, module)
        self.network_aliases.apply(create_spec, module)

        logger.debug("Built cluster create options for module %s", module.name)
        return CombinedConfig(
            image=combined_config.image,
            create_spec=create_spec,
            auth_config=combined_config.auth_config,
        )
