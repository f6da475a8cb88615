"""
Integration tests for the Docker volume plugin endpoints.
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from blocker.api.main import app, get_registry
from blocker.driver.registry import Volume
from blocker.exceptions import (
    DeviceExhausted,
    MountExecFailure,
    VolumeAlreadyInUse,
    VolumeAlreadyMounted,
    VolumeNotFound,
    VolumeNotMounted,
)
from tests.fakes import client_error

PLUGIN_CONTENT_TYPE = {"Content-Type": "application/vnd.docker.plugins.v1.2+json"}


@pytest.fixture
def registry():
    mock = MagicMock()
    app.dependency_overrides[get_registry] = lambda: mock
    yield mock
    app.dependency_overrides.clear()


@pytest.fixture
def client(registry):
    """Create test client."""
    return TestClient(app)


class TestHandshake:
    """Tests for Plugin.Activate and Capabilities."""

    @pytest.mark.integration
    def test_activate(self, client):
        response = client.post("/Plugin.Activate")

        assert response.status_code == 200
        assert response.json() == {"Implements": ["VolumeDriver"]}

    @pytest.mark.integration
    def test_capabilities(self, client):
        response = client.post("/VolumeDriver.Capabilities")

        assert response.json() == {"Capabilities": {"Scope": "local"}}


class TestCreateVolume:
    """Tests for VolumeDriver.Create."""

    @pytest.mark.integration
    def test_create(self, client, registry):
        response = client.post(
            "/VolumeDriver.Create",
            content='{"Name": "vol-1", "Opts": {"size": "10"}}',
            headers=PLUGIN_CONTENT_TYPE,
        )

        assert response.status_code == 200
        assert response.json() == {"Err": ""}
        registry.create.assert_called_once_with("vol-1")

    @pytest.mark.integration
    def test_create_in_use(self, client, registry):
        registry.create.side_effect = VolumeAlreadyInUse("Volume vol-1 already in use")

        response = client.post("/VolumeDriver.Create", json={"Name": "vol-1"})

        assert response.status_code == 409
        assert response.json() == {"Err": "Volume vol-1 already in use"}

    @pytest.mark.integration
    def test_create_missing_name(self, client):
        response = client.post("/VolumeDriver.Create", json={})

        assert response.status_code == 422
        assert response.json() == {"Err": "Invalid request: body.Name: Field required"}


class TestMountVolume:
    """Tests for VolumeDriver.Mount."""

    @pytest.mark.integration
    def test_mount(self, client, registry):
        registry.mount.return_value = "/mnt/blocker/abc"

        response = client.post("/VolumeDriver.Mount", json={"Name": "vol-1", "ID": "c0ffee"})

        assert response.status_code == 200
        assert response.json() == {"Mountpoint": "/mnt/blocker/abc", "Err": ""}

    @pytest.mark.integration
    @pytest.mark.parametrize(
        "error,status",
        [
            (VolumeNotFound("Volume vol-1 not found"), 404),
            (VolumeAlreadyMounted("Volume vol-1 already mounted"), 409),
            (DeviceExhausted("No devices available for attach"), 500),
            (MountExecFailure("Mounting device /dev/xvdf failed", output="bad fs"), 500),
        ],
    )
    def test_mount_errors(self, client, registry, error, status):
        registry.mount.side_effect = error

        response = client.post("/VolumeDriver.Mount", json={"Name": "vol-1"})

        assert response.status_code == status
        assert response.json()["Err"] == error.message

    @pytest.mark.integration
    def test_mount_aws_error(self, client, registry):
        registry.mount.side_effect = client_error("UnauthorizedOperation")

        response = client.post("/VolumeDriver.Mount", json={"Name": "vol-1"})

        assert response.status_code == 500
        assert "UnauthorizedOperation" in response.json()["Err"]

    @pytest.mark.integration
    def test_mount_malformed_body(self, client, registry):
        response = client.post("/VolumeDriver.Mount", content="not json", headers=PLUGIN_CONTENT_TYPE)

        assert response.status_code == 422
        assert response.json()["Err"].startswith("Invalid request: ")
        registry.mount.assert_not_called()


class TestPathVolume:
    """Tests for VolumeDriver.Path."""

    @pytest.mark.integration
    def test_path(self, client, registry):
        registry.path.return_value = "/mnt/blocker/abc"

        response = client.post("/VolumeDriver.Path", json={"Name": "vol-1"})

        assert response.json() == {"Mountpoint": "/mnt/blocker/abc", "Err": ""}

    @pytest.mark.integration
    def test_path_not_mounted(self, client, registry):
        registry.path.side_effect = VolumeNotMounted("Volume vol-1 not mounted")

        response = client.post("/VolumeDriver.Path", json={"Name": "vol-1"})

        assert response.status_code == 409
        assert response.json()["Err"] == "Volume vol-1 not mounted"


class TestUnmountAndRemove:
    """Tests for VolumeDriver.Unmount and VolumeDriver.Remove."""

    @pytest.mark.integration
    def test_unmount(self, client, registry):
        response = client.post("/VolumeDriver.Unmount", json={"Name": "vol-1", "ID": "c0ffee"})

        assert response.json() == {"Err": ""}
        registry.unmount.assert_called_once_with("vol-1")

    @pytest.mark.integration
    def test_remove(self, client, registry):
        response = client.post("/VolumeDriver.Remove", json={"Name": "vol-1"})

        assert response.json() == {"Err": ""}
        registry.remove.assert_called_once_with("vol-1")

    @pytest.mark.integration
    def test_remove_not_found(self, client, registry):
        registry.remove.side_effect = VolumeNotFound("Volume vol-1 not found")

        response = client.post("/VolumeDriver.Remove", json={"Name": "vol-1"})

        assert response.status_code == 404


class TestInspect:
    """Tests for VolumeDriver.Get and VolumeDriver.List."""

    @pytest.mark.integration
    def test_get(self, client, registry):
        registry.get.return_value = Volume("vol-1", "/mnt/blocker/abc")

        response = client.post("/VolumeDriver.Get", json={"Name": "vol-1"})

        assert response.json() == {
            "Volume": {"Name": "vol-1", "Mountpoint": "/mnt/blocker/abc", "Status": {}},
            "Err": "",
        }

    @pytest.mark.integration
    def test_list(self, client, registry):
        registry.list.return_value = [Volume("vol-1"), Volume("vol-2", "/mnt/blocker/abc")]

        response = client.post("/VolumeDriver.List")

        assert response.json()["Volumes"] == [
            {"Name": "vol-1", "Mountpoint": "", "Status": {}},
            {"Name": "vol-2", "Mountpoint": "/mnt/blocker/abc", "Status": {}},
        ]
