"""
Device slot allocation for EBS attach.

See http://docs.aws.amazon.com/AWSEC2/latest/UserGuide/device_naming.html
for the recommended naming scheme (/dev/sd[f-p]).
"""

import logging

from botocore.exceptions import ClientError

from blocker.ec2.client import is_device_in_use
from blocker.exceptions import DeviceExhausted
from blocker.lib.devices import DeviceNamespace

LOG = logging.getLogger(__name__)


class DeviceAllocator:
    """Picks a free device slot and requests the attach on it.

    The slot pool is shared with every other process on the host, so a slot
    can be taken between the local check and the attach request. EC2 reports
    that as InvalidParameterValue and the next slot is tried.
    """

    def __init__(self, client, instance_id: str, devices: DeviceNamespace, letters: str = "fghijklmnop"):
        self.client = client
        self.instance_id = instance_id
        self.devices = devices
        self.letters = letters

    def allocate(self, volume_id: str) -> str:
        """Request attach of volume_id on the first free slot.

        Returns:
            The slot letter the attach request was accepted for

        Raises:
            DeviceExhausted: Every slot is in use locally or remotely
            ClientError: Attach failed for any reason other than a taken name
        """
        for letter in self.letters:
            if self.devices.in_use(letter):
                continue

            device = self.devices.attach_name(letter)
            try:
                self.client.attach_volume(volume_id, device, self.instance_id)
            except ClientError as e:
                if is_device_in_use(e):
                    LOG.warning("Device %s already in use on %s, trying next slot", device, self.instance_id)
                    continue
                raise

            LOG.debug("Attach of %s requested on %s", volume_id, device)
            return letter

        raise DeviceExhausted(
            f"No devices available for attach: /dev/sd[{self.letters[0]}-{self.letters[-1]}] taken"
        )
