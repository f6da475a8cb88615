"""EC2 client for EBS attach/detach."""

import logging
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import ClientError

from blocker.exceptions import StorageServiceError

LOG = logging.getLogger(__name__)

# Error code EC2 returns when the requested device name is already taken.
INVALID_PARAMETER_VALUE = "InvalidParameterValue"


def is_device_in_use(error: Exception) -> bool:
    """Whether an attach error means the device name is taken."""
    if not isinstance(error, ClientError):
        return False
    return error.response.get("Error", {}).get("Code") == INVALID_PARAMETER_VALUE


class EbsClient:
    """Thin wrapper over the boto3 EC2 client.

    ClientError and BotoCoreError raised by boto3 propagate unchanged so
    callers can inspect the error code.
    """

    def __init__(self, region: str, ec2_client: Optional[Any] = None):
        """Initialize the client.

        Args:
            region: AWS region the instance lives in
            ec2_client: Pre-built boto3 EC2 client (defaults to a new one)
        """
        self.region = region
        if ec2_client is None:
            session = boto3.session.Session(region_name=region)
            ec2_client = session.client("ec2")
        self.ec2 = ec2_client

    def describe_volume(self, volume_id: str) -> Dict[str, Any]:
        """Return the current description of one volume.

        Returns:
            Volume record with "State" and "Attachments" keys

        Raises:
            StorageServiceError: EC2 returned no record for the volume
        """
        response = self.ec2.describe_volumes(VolumeIds=[volume_id])
        volumes = response.get("Volumes", [])
        if not volumes:
            raise StorageServiceError(f"Volume {volume_id} not returned by DescribeVolumes")
        return volumes[0]

    def attach_volume(self, volume_id: str, device: str, instance_id: str) -> None:
        self.ec2.attach_volume(Device=device, InstanceId=instance_id, VolumeId=volume_id)

    def detach_volume(self, volume_id: str, instance_id: str) -> None:
        self.ec2.detach_volume(InstanceId=instance_id, VolumeId=volume_id)
        LOG.info("Detached EBS volume %s from %s", volume_id, instance_id)
