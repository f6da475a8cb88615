"""
Driver wiring.
"""

import logging
from typing import Optional

from blocker.driver.allocator import DeviceAllocator
from blocker.driver.attacher import VolumeAttacher
from blocker.driver.mounter import VolumeMounter
from blocker.driver.poller import StatePoller
from blocker.driver.registry import VolumeRegistry
from blocker.ec2.client import EbsClient
from blocker.lib.config import BlockerConfig, load_config
from blocker.lib.devices import DeviceNamespace
from blocker.lib.metadata import HostIdentity, detect_host_identity

LOG = logging.getLogger(__name__)


def create_registry(
    cfg: Optional[BlockerConfig] = None,
    identity: Optional[HostIdentity] = None,
    client: Optional[EbsClient] = None,
) -> VolumeRegistry:
    """
    Build a registry with the full attach/mount stack underneath.

    Raises:
        HostIdentityError: If instance identity cannot be determined
    """
    cfg = cfg or load_config()
    identity = identity or detect_host_identity(cfg)
    client = client or EbsClient(identity.region)

    devices = DeviceNamespace(cfg.device_root)
    poller = StatePoller(client, attempts=cfg.poll_attempts, interval=cfg.poll_interval)
    allocator = DeviceAllocator(client, identity.instance_id, devices, letters=cfg.device_letters)
    attacher = VolumeAttacher(client, identity.instance_id, allocator, poller, devices)
    mounter = VolumeMounter(attacher, mount_base=cfg.mount_base, fs_type=cfg.fs_type)

    LOG.info("Volume driver ready for instance %s in %s", identity.instance_id, identity.region)
    return VolumeRegistry(mounter)
