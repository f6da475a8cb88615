"""
Pydantic models for the Docker volume plugin protocol.

Field names follow the protocol's capitalized JSON keys.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class VolumeRequest(BaseModel):
    """Request carrying only a volume name (Remove, Path, Get)."""

    Name: str = Field(..., description="Volume name (EBS volume id)", min_length=1)


class CreateRequest(VolumeRequest):
    """Request model for VolumeDriver.Create."""

    Opts: Optional[Dict[str, str]] = Field(None, description="Driver options (unused)")


class MountRequest(VolumeRequest):
    """Request model for VolumeDriver.Mount and VolumeDriver.Unmount."""

    ID: Optional[str] = Field(None, description="Caller id")


class ErrResponse(BaseModel):
    Err: str = ""


class MountResponse(ErrResponse):
    Mountpoint: str = ""


class VolumeInfo(BaseModel):
    Name: str
    Mountpoint: str = ""
    Status: Dict[str, str] = Field(default_factory=dict)


class GetResponse(ErrResponse):
    Volume: Optional[VolumeInfo] = None


class ListResponse(ErrResponse):
    Volumes: List[VolumeInfo] = Field(default_factory=list)


class ActivateResponse(BaseModel):
    Implements: List[str] = Field(default_factory=lambda: ["VolumeDriver"])


class PluginCapabilities(BaseModel):
    Scope: str = "local"


class CapabilitiesResponse(BaseModel):
    Capabilities: PluginCapabilities = Field(default_factory=PluginCapabilities)
