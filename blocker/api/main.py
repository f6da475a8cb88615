"""
FastAPI application implementing the Docker volume plugin protocol.
"""

import logging
import threading
import uuid
from typing import Any, Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from blocker.api.models import (
    ActivateResponse,
    CapabilitiesResponse,
    CreateRequest,
    ErrResponse,
    GetResponse,
    ListResponse,
    MountRequest,
    MountResponse,
    VolumeInfo,
    VolumeRequest,
)
from blocker.driver.factory import create_registry
from blocker.driver.registry import Volume, VolumeRegistry
from blocker.exceptions import (
    BlockerException,
    VolumeAlreadyInUse,
    VolumeAlreadyMounted,
    VolumeNotFound,
    VolumeNotMounted,
)

app = FastAPI(title="Blocker", description="EBS volume plugin for Docker", version="0.1.0")
logger = logging.getLogger(__name__)

_registry: Optional[VolumeRegistry] = None
_registry_lock = threading.Lock()


def get_registry() -> VolumeRegistry:
    """Return the process-wide registry, building it on first use."""
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = create_registry()
        return _registry


def _status_for(exc: BlockerException) -> int:
    if isinstance(exc, VolumeNotFound):
        return 404
    if isinstance(exc, (VolumeAlreadyInUse, VolumeAlreadyMounted, VolumeNotMounted)):
        return 409
    return 500


@app.exception_handler(BlockerException)
async def blocker_exception_handler(request: Request, exc: BlockerException) -> JSONResponse:
    logger.warning("%s failed: %s", request.url.path, exc.message)
    return JSONResponse(status_code=_status_for(exc), content={"Err": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    logger.warning("%s rejected: %s", request.url.path, errors)
    return JSONResponse(status_code=422, content={"Err": f"Invalid request: {errors}"})


@app.exception_handler(ClientError)
@app.exception_handler(BotoCoreError)
async def aws_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.warning("%s failed: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"Err": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler."""
    request_id = str(uuid.uuid4())
    logger.exception("Unhandled error (request_id=%s, path=%s)", request_id, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"Err": f"Internal server error (request_id={request_id})"},
    )


def _volume_info(volume: Volume) -> VolumeInfo:
    return VolumeInfo(Name=volume.name, Mountpoint=volume.mount_path or "")


@app.post("/Plugin.Activate", response_model=ActivateResponse)
def activate() -> Dict[str, Any]:
    """
    Handshake; declares this plugin as a volume driver.
    """
    return {"Implements": ["VolumeDriver"]}


@app.post("/VolumeDriver.Create", response_model=ErrResponse)
def create_volume(req: CreateRequest, registry: VolumeRegistry = Depends(get_registry)) -> Dict[str, Any]:
    """
    Register a volume. Opts are accepted and ignored.
    """
    registry.create(req.Name)
    return {"Err": ""}


@app.post("/VolumeDriver.Remove", response_model=ErrResponse)
def remove_volume(req: VolumeRequest, registry: VolumeRegistry = Depends(get_registry)) -> Dict[str, Any]:
    registry.remove(req.Name)
    return {"Err": ""}


@app.post("/VolumeDriver.Mount", response_model=MountResponse)
def mount_volume(req: MountRequest, registry: VolumeRegistry = Depends(get_registry)) -> Dict[str, Any]:
    """
    Attach the EBS volume and mount it; returns the mountpoint.
    """
    return {"Mountpoint": registry.mount(req.Name), "Err": ""}


@app.post("/VolumeDriver.Path", response_model=MountResponse)
def volume_path(req: VolumeRequest, registry: VolumeRegistry = Depends(get_registry)) -> Dict[str, Any]:
    return {"Mountpoint": registry.path(req.Name), "Err": ""}


@app.post("/VolumeDriver.Unmount", response_model=ErrResponse)
def unmount_volume(req: MountRequest, registry: VolumeRegistry = Depends(get_registry)) -> Dict[str, Any]:
    """
    Unmount and detach the volume; it stays registered.
    """
    registry.unmount(req.Name)
    return {"Err": ""}


@app.post("/VolumeDriver.Get", response_model=GetResponse)
def get_volume(req: VolumeRequest, registry: VolumeRegistry = Depends(get_registry)) -> Dict[str, Any]:
    return {"Volume": _volume_info(registry.get(req.Name)), "Err": ""}


@app.post("/VolumeDriver.List", response_model=ListResponse)
def list_volumes(registry: VolumeRegistry = Depends(get_registry)) -> Dict[str, Any]:
    return {"Volumes": [_volume_info(v) for v in registry.list()], "Err": ""}


@app.post("/VolumeDriver.Capabilities", response_model=CapabilitiesResponse)
def capabilities() -> Dict[str, Any]:
    """
    Volumes are attached to a single host, so the scope is local.
    """
    return {"Capabilities": {"Scope": "local"}}
