"""
Bounded polling of remote volume state.

Attach and detach are asynchronous in EC2, so most steps have to wait for a
state transition before moving on. The wait is a fixed number of attempts with
a fixed delay; describe errors are not retried.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

from blocker.exceptions import StateTransitionTimeout

LOG = logging.getLogger(__name__)

ATTACHMENT_ATTACHED = "attached"
VOLUME_AVAILABLE = "available"

# A check returns None once the volume is in the wanted state, otherwise a
# reason describing the current state.
StateCheck = Callable[[Dict[str, Any]], Optional[str]]


def check_attached(volume: Dict[str, Any]) -> Optional[str]:
    attachments = volume.get("Attachments") or []
    if len(attachments) != 1:
        return f"Volume state transition failed: expected 1 attachment, got {len(attachments)}"
    state = attachments[0].get("State")
    if state == ATTACHMENT_ATTACHED:
        return None
    return f"Volume state transition failed: seeking {ATTACHMENT_ATTACHED}, current is {state}"


def check_available(volume: Dict[str, Any]) -> Optional[str]:
    state = volume.get("State")
    if state == VOLUME_AVAILABLE:
        return None
    return f"Volume state transition failed: seeking {VOLUME_AVAILABLE}, current is {state}"


class StatePoller:
    def __init__(
        self,
        client,
        attempts: int = 12,
        interval: float = 5,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client
        self.attempts = attempts
        self.interval = interval
        self._sleep = sleep

    def wait_until_state(self, volume_id: str, check: StateCheck) -> None:
        """Describe the volume until check passes.

        Raises:
            StateTransitionTimeout: check still failing after the last attempt
            ClientError: describe failed (not retried)
        """
        tries = 0
        while True:
            tries += 1
            volume = self.client.describe_volume(volume_id)

            reason = check(volume)
            if reason is None:
                return
            if tries >= self.attempts:
                raise StateTransitionTimeout(reason, volume_id=volume_id, attempts=tries)

            LOG.debug("Waiting for volume %s (attempt %d/%d): %s", volume_id, tries, self.attempts, reason)
            self._sleep(self.interval)

    def wait_until_attached(self, volume_id: str) -> None:
        self.wait_until_state(volume_id, check_attached)

    def wait_until_available(self, volume_id: str) -> None:
        self.wait_until_state(volume_id, check_available)
