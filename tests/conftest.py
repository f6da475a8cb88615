"""
Pytest configuration and fixtures.
"""

import shutil
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from blocker.lib.devices import DeviceNamespace
from tests.fakes import volume_state


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def mock_subprocess():
    """Mock subprocess.run for testing."""
    with patch("subprocess.run") as mock:
        mock.return_value = MagicMock(returncode=0, stdout="")
        yield mock


@pytest.fixture
def dev_dir(temp_dir):
    """Empty stand-in for /dev."""
    path = temp_dir / "dev"
    path.mkdir()
    return path


@pytest.fixture
def devices(dev_dir):
    return DeviceNamespace(str(dev_dir))


@pytest.fixture
def mock_ec2():
    """Mock EbsClient; volume is available and attaches cleanly."""
    client = MagicMock()
    client.describe_volume.return_value = volume_state("available")
    return client
