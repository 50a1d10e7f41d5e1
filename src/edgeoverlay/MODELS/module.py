"""
Models for deployment modules and the runtime they are deployed to.
"""
import json
from typing import List, Dict, Optional, Any
from pydantic import BaseModel, Field, field_validator
from .create_spec import CreateSpec
from .combined_config import AuthConfig

DOCKER_MODULE_TYPE = "docker"

class Module(BaseModel):
    """
    A single module from a deployment manifest.
    """
    name: str = Field(min_length=1)
    image: str = Field(min_length=1)
    type: str = DOCKER_MODULE_TYPE
    version: Optional[str] = None
    status: Optional[str] = None

    # Base create options as authored in the manifest
    create_options: Optional[CreateSpec] = None

    @field_validator("create_options", mode="before")
    @classmethod
    def _parse_create_options(cls, value: Any) -> Any:
        """
        Accepts create options as a JSON string, as the manifest schema stores them.
        """
        if isinstance(value, str):
            if not value.strip():
                return None
            try:
                return json.loads(value)
            except json.JSONDecodeError as e:
                raise ValueError(f"createOptions is not valid JSON: {e}") from e
        return value

class RegistryCredential(BaseModel):
    """
    Credentials for a container registry, as declared in the runtime settings.
    """
    address: str
    username: Optional[str] = None
    password: Optional[str] = None

    def to_auth_config(self) -> AuthConfig:
        return AuthConfig(serveraddress=self.address, username=self.username, password=self.password)

class RuntimeInfo(BaseModel):
    """
    Description of the runtime that modules are deployed to.
    """
    type: str = DOCKER_MODULE_TYPE
    registry_credentials: Dict[str, RegistryCredential] = {}

    def auth_configs(self) -> List[AuthConfig]:
        return [cred.to_auth_config() for cred in self.registry_credentials.values()]

class DeploymentManifest(BaseModel):
    """
    A parsed deployment manifest. System modules come first in `modules`.
    """
    runtime: RuntimeInfo = Field(default_factory=RuntimeInfo)
    modules: Dict[str, Module] = {}

    def find_module(self, name: str) -> Optional[Module]:
        """
        Looks up a module by exact name, then case-insensitively.
        """
        if name in self.modules:
            return self.modules[name]
        wanted = name.casefold()
        for module_name, module in self.modules.items():
            if module_name.casefold() == wanted:
                return module
        return None
