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
Bind-mounting of local socket endpoints into module containers.
"""
import logging

from ..CONFIG.config_source import ConfigSource
from ..CONFIG.settings import MANAGEMENT_URI_KEY, WORKLOAD_URI_KEY, OverlaySettings
from ..MODELS.create_spec import CreateSpec, HostConfig
from ..MODELS.module import Module
from ..UTILS.endpoint_uri import EndpointUri

logger = logging.getLogger(__name__)

class SocketMountOverlay:
    """
    Adds bind mounts for workload and management endpoints exposed over Unix sockets.

    The workload socket is mounted into every module. The management socket is
    only mounted into the agent module.
    """
    def __init__(self, config_source: ConfigSource, settings: OverlaySettings):
        """
        Initializes the overlay.

        :param config_source: Source for the endpoint URIs.
        :param settings: Reserved module names and bind path policy.
        """
        self.config_source = config_source
        self.settings = settings

    def apply(self, create_spec: CreateSpec, module: Module) -> CreateSpec:
        """
        Adds socket binds to a create specification in place.

        :param create_spec: Specification owned by the caller; mutated.
        :param module: The module the specification is built for.
        :return: The same specification.
        :raises MissingConfigurationError: If an endpoint URI is not configured.
        :raises InvalidEndpointUriError: If an endpoint URI cannot be parsed.
        """
        workload_uri = EndpointUri.parse(self.config_source.get_required(WORKLOAD_URI_KEY))
        if workload_uri.is_local_transport:
            self._add_bind(create_spec, workload_uri, module)

        management_uri = EndpointUri.parse(self.config_source.get_required(MANAGEMENT_URI_KEY))
        if management_uri.is_local_transport and self.settings.is_edge_agent(module):
            self._add_bind(create_spec, management_uri, module)

        return create_spec

    def _add_bind(self, create_spec: CreateSpec, uri: EndpointUri, module: Module):
        """
        Appends a "path:path" bind, creating HostConfig and Binds when absent.
        Existing binds are kept and no de-duplication is done.
        """
        host_config = create_spec.host_config if create_spec.host_config is not None else HostConfig()
        binds = host_config.binds if host_config.binds is not None else []
        path = uri.bind_path(self.settings.bind_path_policy)
        binds.append(f"{path}:{path}")

        host_config.binds = binds
        create_spec.host_config = host_config
        logger.debug("Mounting %s into module %s as %s:%s", uri, module.name, path, path)
