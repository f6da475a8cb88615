"""
Attach/detach of EBS volumes to the local instance.
"""

import logging

from blocker.driver.allocator import DeviceAllocator
from blocker.driver.poller import StatePoller
from blocker.exceptions import DeviceMissingAfterAttach
from blocker.lib.devices import DeviceNamespace

LOG = logging.getLogger(__name__)


class VolumeAttacher:
    def __init__(
        self,
        client,
        instance_id: str,
        allocator: DeviceAllocator,
        poller: StatePoller,
        devices: DeviceNamespace,
    ):
        self.client = client
        self.instance_id = instance_id
        self.allocator = allocator
        self.poller = poller
        self.devices = devices

    def attach(self, volume_id: str) -> str:
        """
        Attach a volume and return its local device path.

        A previous detach may still be in flight, so the volume is first
        waited on until it is available again.

        Raises:
            DeviceMissingAfterAttach: EC2 reports attached but no device node exists
        """
        self.poller.wait_until_available(volume_id)

        letter = self.allocator.allocate(volume_id)
        self.poller.wait_until_attached(volume_id)

        device = self.devices.attach_name(letter)
        LOG.info("Attached EBS volume %s to %s:%s", volume_id, self.instance_id, device)

        local = self.devices.resolve(letter)
        if local is None:
            self.detach_quietly(volume_id)
            raise DeviceMissingAfterAttach(f"Device {device} is missing after attach")

        if local != device:
            LOG.info("Local device name is %s", local)
        return local

    def detach(self, volume_id: str) -> None:
        """Request detach; does not wait for the volume to become available."""
        self.client.detach_volume(volume_id, self.instance_id)

    def detach_quietly(self, volume_id: str) -> None:
        """Compensating detach. Errors are logged and dropped."""
        try:
            self.detach(volume_id)
        except Exception as e:
            LOG.warning("Best-effort detach of %s failed: %s", volume_id, e)
