"""
Configuration keys and the overlay settings derived from them.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import ConfigurationError
from ..MODELS.module import Module
from ..UTILS.platform import BindPathPolicy, detect_bind_path_policy
from .config_source import ConfigSource

# Keys read from the configuration source
NETWORK_ID_KEY = "NetworkId"
EDGE_DEVICE_HOST_NAME_KEY = "EdgeDeviceHostName"
WORKLOAD_URI_KEY = "IOTEDGE_WORKLOADURI"
MANAGEMENT_URI_KEY = "IOTEDGE_MANAGEMENTURI"
EDGE_HUB_MODULE_NAME_KEY = "EdgeHubModuleName"
EDGE_AGENT_MODULE_NAME_KEY = "EdgeAgentModuleName"
BIND_PATH_POLICY_KEY = "BindPathPolicy"

DEFAULT_EDGE_HUB_MODULE_NAME = "edgeHub"
DEFAULT_EDGE_AGENT_MODULE_NAME = "edgeAgent"

def _reserved_name(config: ConfigSource, key: str, default: str) -> str:
    """
    Returns a configured reserved module name, or the default when unset or blank.
    """
    value = config.get_value(key)
    return value.strip() if value and value.strip() else default

class OverlaySettings(BaseModel):
    """
    Reserved module names and the bind path policy, fixed at startup.
    """
    model_config = ConfigDict(frozen=True)

    edge_hub_module_name: str = DEFAULT_EDGE_HUB_MODULE_NAME
    edge_agent_module_name: str = DEFAULT_EDGE_AGENT_MODULE_NAME
    bind_path_policy: BindPathPolicy = Field(default_factory=lambda: detect_bind_path_policy())

    @classmethod
    def from_config(cls, config: ConfigSource, platform_name: Optional[str] = None) -> "OverlaySettings":
        """
        Builds settings from a configuration source.

        :param config: Source for reserved names and an optional policy override.
        :param platform_name: Platform to detect the policy for; defaults to the host.
        :raises ConfigurationError: If the policy override is not a known policy.
        """
        policy = config.get_value(BIND_PATH_POLICY_KEY)
        try:
            return cls(
                edge_hub_module_name=_reserved_name(config, EDGE_HUB_MODULE_NAME_KEY, DEFAULT_EDGE_HUB_MODULE_NAME),
                edge_agent_module_name=_reserved_name(config, EDGE_AGENT_MODULE_NAME_KEY, DEFAULT_EDGE_AGENT_MODULE_NAME),
                bind_path_policy=policy.strip().lower() if policy and policy.strip() else detect_bind_path_policy(platform_name),
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid overlay settings: {e}") from e

    def is_edge_hub(self, module: Module) -> bool:
        return module.name.casefold() == self.edge_hub_module_name.casefold()

    def is_edge_agent(self, module: Module) -> bool:
        return module.name.casefold() == self.edge_agent_module_name.casefold()
