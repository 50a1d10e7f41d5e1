"""
Models for the container create request sent to the runtime.

Only the fields the overlays touch are modelled explicitly; everything else in
the Docker Engine create body (Env, Labels, ExposedPorts, ...) is carried
through untouched as extra data.
"""
from typing import List, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

class EndpointSettings(BaseModel):
    """
    Settings for one network the container is attached to.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    aliases: List[str] = Field(default_factory=list, alias="Aliases")

class NetworkingConfig(BaseModel):
    """
    Network attachments, keyed by network id.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    endpoints_config: Optional[Dict[str, EndpointSettings]] = Field(default=None, alias="EndpointsConfig")

class HostConfig(BaseModel):
    """
    Host-side container settings. Binds are "source:dest[:mode]" strings.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    binds: Optional[List[str]] = Field(default=None, alias="Binds")

class CreateSpec(BaseModel):
    """
    A container creation specification, equivalent to the JSON body of a
    Docker Engine create-container request.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    host_config: Optional[HostConfig] = Field(default=None, alias="HostConfig")
    networking_config: Optional[NetworkingConfig] = Field(default=None, alias="NetworkingConfig")

    def to_wire(self) -> Dict:
        """
        Returns the request body using the runtime's field names.
        """
        return self.model_dump(by_alias=True, exclude_none=True)
