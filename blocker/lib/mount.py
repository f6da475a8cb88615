"""
Mountpoint and mount(8)/umount(8) helpers.
"""

import os
import subprocess
import uuid
from typing import List

from blocker.exceptions import MountExecFailure, MountpointError, UnmountExecFailure


def _run(cmd: List[str]) -> subprocess.CompletedProcess:
    # stderr folded into stdout so failures carry the full command output
    return subprocess.run(
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        check=False
    )


def new_mount_point(base_path: str) -> str:
    """
    Generate a fresh mountpoint path under base_path.

    Args:
        base_path: Base directory for mounts (e.g., /mnt/blocker)

    Returns:
        Full path to a mountpoint named by a random UUID
    """
    return os.path.join(base_path, str(uuid.uuid4()))


def ensure_mount_point(mount_point: str) -> None:
    """
    Create the mountpoint directory if missing.

    Args:
        mount_point: Path to mountpoint

    Raises:
        MountpointError: If creation fails or the path is not a directory
    """
    try:
        os.makedirs(mount_point, mode=0o700, exist_ok=True)
    except OSError as e:
        raise MountpointError(f"Failed to create mountpoint {mount_point}: {e}")

    if not os.path.isdir(mount_point):
        raise MountpointError(f"Mountpoint {mount_point} is not a directory")


def remove_mount_point(mount_point: str) -> None:
    """
    Remove an (empty) mountpoint directory.

    Raises:
        MountpointError: If removal fails
    """
    try:
        os.rmdir(mount_point)
    except OSError as e:
        raise MountpointError(f"Failed to remove mountpoint {mount_point}: {e}")


def mount_device(device: str, mount_point: str, fs_type: str = "") -> None:
    """
    Mount a block device.

    Args:
        device: Device path (e.g., "/dev/xvdf")
        mount_point: Mountpoint directory
        fs_type: Filesystem type; empty lets mount autodetect

    Raises:
        MountExecFailure: If mounting fails
    """
    cmd = ["mount"]
    if fs_type:
        cmd.extend(["-t", fs_type])
    cmd.extend([device, mount_point])

    try:
        result = _run(cmd)
    except OSError as e:
        raise MountExecFailure(f"Mounting device {device} to {mount_point} failed: {e}", output=str(e))

    if result.returncode != 0:
        raise MountExecFailure(
            f"Mounting device {device} to {mount_point} failed: {result.stdout}",
            output=result.stdout or "",
        )


def unmount(mount_point: str) -> None:
    """
    Unmount a filesystem.

    Args:
        mount_point: Mountpoint directory

    Raises:
        UnmountExecFailure: If unmounting fails
    """
    try:
        result = _run(["umount", mount_point])
    except OSError as e:
        raise UnmountExecFailure(f"Unmounting {mount_point} failed: {e}", output=str(e))

    if result.returncode != 0:
        raise UnmountExecFailure(
            f"Unmounting {mount_point} failed: {result.stdout}",
            output=result.stdout or "",
        )
