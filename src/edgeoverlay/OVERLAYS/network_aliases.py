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
Cluster network attachment and hostname aliasing for module containers.
"""
import logging

from ..CONFIG.config_source import ConfigSource
from ..CONFIG.settings import EDGE_DEVICE_HOST_NAME_KEY, NETWORK_ID_KEY, OverlaySettings
from ..MODELS.create_spec import CreateSpec, EndpointSettings, NetworkingConfig
from ..MODELS.module import Module

logger = logging.getLogger(__name__)

class NetworkAliasOverlay:
    """
    Attaches containers to the configured cluster network.

    Only applies when the create options carry no endpoint configuration of
    their own. The hub module additionally gets the device hostname as its
    alias so that leaf devices and other modules can reach it by that name.
    """
    def __init__(self, config_source: ConfigSource, settings: OverlaySettings):
        """
        Initializes the overlay.

        :param config_source: Source for the network id and device hostname.
        :param settings: Reserved module names.
        """
        self.config_source = config_source
        self.settings = settings

    def apply(self, create_spec: CreateSpec, module: Module) -> CreateSpec:
        """
        Installs a single-network endpoint configuration in place.

        :param create_spec: Specification owned by the caller; mutated.
        :param module: The module the specification is built for.
        :return: The same specification.
        """
        networking_config = create_spec.networking_config
        if networking_config is not None and networking_config.endpoints_config is not None:
            logger.debug("Module %s already declares network endpoints, leaving them as is", module.name)
            return create_spec

        network_id = self.config_source.get_value(NETWORK_ID_KEY)
        host_name = self.config_source.get_value(EDGE_DEVICE_HOST_NAME_KEY)

        if not network_id or not network_id.strip():
            logger.debug("No network id configured, module %s is not attached", module.name)
            return create_spec

        endpoint_settings = EndpointSettings()
        if self.settings.is_edge_hub(module) and host_name and host_name.strip():
            endpoint_settings.aliases = [host_name]

        if networking_config is None:
            networking_config = NetworkingConfig()
        # Replaces rather than merges: one network per container
        networking_config.endpoints_config = {network_id: endpoint_settings}
        create_spec.networking_config = networking_config

        logger.debug("Attached module %s to network %s with aliases %s",
                     module.name, network_id, endpoint_settings.aliases)
        return create_spec
