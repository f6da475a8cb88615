"""
Blocker - EBS volume plugin for Docker.

This package attaches pre-existing EBS volumes to the local EC2 instance,
mounts them under a private mountpoint, and reverses both steps on teardown.
"""

__version__ = "0.1.0"
__all__ = ["api", "cli", "driver"]
