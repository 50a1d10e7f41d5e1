"""
Models for the merged per-module configuration handed to the container runtime.
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict
from .create_spec import CreateSpec

class AuthConfig(BaseModel):
    """
    Registry credentials used to pull a module image.
    """
    model_config = ConfigDict(frozen=True)

    serveraddress: str
    username: Optional[str] = None
    password: Optional[str] = None
    email: Optional[str] = None

class CombinedConfig(BaseModel):
    """
    Image, create options and auth for one module, ready for submission to the runtime.
    Instances are never mutated once built; overlays produce a new one.
    """
    model_config = ConfigDict(frozen=True)

    image: str
    create_spec: Optional[CreateSpec] = None
    auth_config: Optional[AuthConfig] = None

    def to_payload(self, mask_secrets: bool = True) -> Dict[str, Any]:
        """
        Returns a JSON-ready view of the configuration.

        :param mask_secrets: Replace the registry password with asterisks.
        :return: Dictionary with image, createOptions and auth keys.
        """
        payload: Dict[str, Any] = {
            "image": self.image,
            "createOptions": self.create_spec.to_wire() if self.create_spec is not None else {},
        }
        if self.auth_config is not None:
            auth = self.auth_config.model_dump(exclude_none=True)
            if mask_secrets and auth.get("password"):
                auth["password"] = "********"
            payload["auth"] = auth
        return payload
