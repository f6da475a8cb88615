"""
In-memory registry of named volumes.

Every public lifecycle call goes through here. The map is not persisted, so a
restart forgets volumes that are still mounted on the host.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from blocker.driver.mounter import VolumeMounter
from blocker.exceptions import VolumeAlreadyInUse, VolumeAlreadyMounted, VolumeNotFound, VolumeNotMounted

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class Volume:
    name: str
    mount_path: Optional[str] = None

    @property
    def mounted(self) -> bool:
        return bool(self.mount_path)


class VolumeRegistry:
    """Name -> mount path map with per-name serialization.

    `_lock` guards the map and the lock table; a per-name lock is held for
    the whole of a state transition, including the remote and OS calls, so
    two calls on the same name never interleave. Different names run
    concurrently.
    """

    def __init__(self, mounter: VolumeMounter):
        self.mounter = mounter
        self._volumes: Dict[str, str] = {}
        self._lock = threading.Lock()
        self._name_locks: Dict[str, threading.Lock] = {}

    @contextmanager
    def _locked(self, name: str, register: bool = False) -> Iterator[None]:
        # locks exist only for names that have been registered
        with self._lock:
            if not register and name not in self._volumes:
                raise VolumeNotFound(f"Volume {name} not found")
            lock = self._name_locks.setdefault(name, threading.Lock())
        with lock:
            yield

    def _lookup(self, name: str) -> str:
        with self._lock:
            if name not in self._volumes:
                raise VolumeNotFound(f"Volume {name} not found")
            return self._volumes[name]

    def _set(self, name: str, mount_path: str) -> None:
        with self._lock:
            self._volumes[name] = mount_path

    def create(self, name: str) -> None:
        """
        Register a volume name.

        Docker won't always cleanly remove entries, so an existing unmounted
        entry is simply re-registered.

        Raises:
            VolumeAlreadyInUse: The name is registered and mounted
        """
        with self._locked(name, register=True):
            with self._lock:
                if self._volumes.get(name):
                    raise VolumeAlreadyInUse(f"Volume {name} already in use")
                self._volumes[name] = ""
        LOG.debug("Registered volume %s", name)

    def mount(self, name: str) -> str:
        with self._locked(name):
            if self._lookup(name):
                raise VolumeAlreadyMounted(f"Volume {name} already mounted")

            mount_path = self.mounter.do_mount(name)
            self._set(name, mount_path)
            return mount_path

    def path(self, name: str) -> str:
        mount_path = self._lookup(name)
        if not mount_path:
            raise VolumeNotMounted(f"Volume {name} not mounted")
        return mount_path

    def unmount(self, name: str) -> None:
        """Unmount a volume. Unmounting an unmounted volume is a no-op."""
        with self._locked(name):
            self._unmount_locked(name)

    def remove(self, name: str) -> None:
        """Unmount if needed, then forget the volume."""
        with self._locked(name):
            self._unmount_locked(name)
            with self._lock:
                self._volumes.pop(name, None)
        LOG.debug("Removed volume %s", name)

    def _unmount_locked(self, name: str) -> None:
        mount_path = self._lookup(name)
        if not mount_path:
            return
        self.mounter.do_unmount(name, mount_path)
        self._set(name, "")

    def get(self, name: str) -> Volume:
        return Volume(name=name, mount_path=self._lookup(name) or None)

    def list(self) -> List[Volume]:
        with self._lock:
            items = sorted(self._volumes.items())
        return [Volume(name=name, mount_path=path or None) for name, path in items]
