"""
Local block device namespace.

EBS recommends /dev/sd[f-p] for data volumes. Xen-based and newer kernels
remap those to /dev/xvd[f-p], so both names are checked locally while the
attach request always uses the /dev/sd* name.
"""

import os
from typing import Optional, Tuple


class DeviceNamespace:
    """Maps device slot letters to the remote and local device names."""

    def __init__(self, root: str = "/dev"):
        self.root = root.rstrip("/") or "/dev"

    @staticmethod
    def attach_name(letter: str) -> str:
        """Device name sent with the attach request."""
        return f"/dev/sd{letter}"

    def local_names(self, letter: str) -> Tuple[str, str]:
        """Legacy and virtual-device node paths for a slot letter."""
        return (
            os.path.join(self.root, f"sd{letter}"),
            os.path.join(self.root, f"xvd{letter}"),
        )

    def in_use(self, letter: str) -> bool:
        return any(os.path.lexists(path) for path in self.local_names(letter))

    def resolve(self, letter: str) -> Optional[str]:
        """
        Find the local node for an attached slot.

        Returns:
            The legacy path if present, else the virtual-device path, else None
        """
        for path in self.local_names(letter):
            if os.path.lexists(path):
                return path
        return None
