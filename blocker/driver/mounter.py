"""
Mount/unmount orchestration on top of attach/detach.
"""

import logging

from blocker.driver.attacher import VolumeAttacher
from blocker.exceptions import MountExecFailure
from blocker.lib.mount import ensure_mount_point, mount_device, new_mount_point, remove_mount_point, unmount

LOG = logging.getLogger(__name__)


class VolumeMounter:
    def __init__(self, attacher: VolumeAttacher, mount_base: str = "/mnt/blocker", fs_type: str = ""):
        self.attacher = attacher
        self.mount_base = mount_base
        self.fs_type = fs_type

    def do_mount(self, volume_id: str) -> str:
        """
        Attach a volume and mount it on a fresh mountpoint.

        Returns:
            The mountpoint path

        Raises:
            MountpointError: Mountpoint could not be created
            MountExecFailure: mount failed (the volume is detached again)
        """
        mount_point = new_mount_point(self.mount_base)
        ensure_mount_point(mount_point)

        device = self.attacher.attach(volume_id)

        try:
            mount_device(device, mount_point, self.fs_type)
        except MountExecFailure:
            self.attacher.detach_quietly(volume_id)
            raise

        LOG.info("Mounted %s (%s) at %s", volume_id, device, mount_point)
        return mount_point

    def do_unmount(self, volume_id: str, mount_point: str) -> None:
        """
        Unmount, remove the mountpoint, and detach.

        Stops at the first failing step. A failing umount leaves everything in
        place so the call can be retried.
        """
        unmount(mount_point)
        remove_mount_point(mount_point)
        self.attacher.detach(volume_id)
        LOG.info("Unmounted %s from %s", volume_id, mount_point)
