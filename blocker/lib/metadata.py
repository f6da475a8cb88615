"""
EC2 instance identity lookup.

Uses the instance metadata service (IMDSv2) to find the instance id, region
and availability zone. Values set in the config file take precedence, which
allows running against EC2 from a development host.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from blocker.exceptions import HostIdentityError
from blocker.lib.config import BlockerConfig

LOG = logging.getLogger(__name__)

TOKEN_TTL_SECONDS = "21600"


@dataclass(frozen=True)
class HostIdentity:
    instance_id: str
    region: str
    availability_zone: str


class MetadataClient:
    """Minimal IMDSv2 client."""

    def __init__(self, endpoint: str = "http://169.254.169.254", timeout: int = 2):
        self.base_url = endpoint.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self._token: Optional[str] = None

    def _get_token(self) -> str:
        if self._token is None:
            response = self.session.put(
                f"{self.base_url}/latest/api/token",
                headers={"X-aws-ec2-metadata-token-ttl-seconds": TOKEN_TTL_SECONDS},
                timeout=self.timeout,
            )
            response.raise_for_status()
            self._token = response.text
        return self._token

    def get(self, path: str) -> str:
        """Fetch one metadata value (e.g. "instance-id").

        Raises:
            HostIdentityError: If the metadata service is unreachable or errors
        """
        try:
            response = self.session.get(
                f"{self.base_url}/latest/meta-data/{path}",
                headers={"X-aws-ec2-metadata-token": self._get_token()},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise HostIdentityError(f"Failed to read instance metadata {path}: {e}")
        return response.text.strip()

    def close(self):
        self.session.close()


def _region_from_zone(zone: str) -> str:
    # us-east-1a -> us-east-1
    return zone[:-1] if zone and zone[-1].isalpha() else zone


def detect_host_identity(cfg: BlockerConfig) -> HostIdentity:
    """
    Resolve the identity of the host this driver runs on.

    Raises:
        HostIdentityError: If any value cannot be determined
    """
    if cfg.instance_id and cfg.region and cfg.availability_zone:
        return HostIdentity(cfg.instance_id, cfg.region, cfg.availability_zone)

    client = MetadataClient(cfg.metadata_endpoint, timeout=cfg.metadata_timeout)
    try:
        instance_id = cfg.instance_id or client.get("instance-id")
        zone = cfg.availability_zone or client.get("placement/availability-zone")
        region = cfg.region
        if not region:
            try:
                region = client.get("placement/region")
            except HostIdentityError:
                region = _region_from_zone(zone)
    finally:
        client.close()

    if not instance_id or not region or not zone:
        raise HostIdentityError("Incomplete instance metadata")

    identity = HostIdentity(instance_id=instance_id, region=region, availability_zone=zone)
    LOG.info(
        "Auto-detected EC2 information: instance=%s region=%s zone=%s",
        identity.instance_id,
        identity.region,
        identity.availability_zone,
    )
    return identity
