"""HTTP client for a running Blocker plugin."""

from typing import Any, Dict, List, Optional

import requests

from blocker.exceptions import BlockerException


class PluginError(BlockerException):
    """Plugin returned an error response."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class PluginConnectionError(BlockerException):
    """Failed to connect to the plugin."""

    pass


class PluginTimeout(BlockerException):
    """Plugin request timed out."""

    pass


class BlockerPluginClient:
    """Client for the Docker volume plugin endpoints.

    Mount and Remove can take minutes (EC2 state polling), hence the long
    default timeout.
    """

    def __init__(self, api_endpoint: str, timeout: int = 180):
        """Initialize the client.

        Args:
            api_endpoint: Plugin URL (e.g., http://127.0.0.1:8080)
            timeout: HTTP request timeout in seconds
        """
        self.base_url = api_endpoint.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()

    def _call(self, endpoint: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """POST to a plugin endpoint.

        Raises:
            PluginConnectionError: Connection failed
            PluginTimeout: Request timed out
            PluginError: Plugin returned an Err
        """
        url = f"{self.base_url}/{endpoint}"

        try:
            response = self.session.post(url, json=payload or {}, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise PluginTimeout(f"Plugin request timed out after {self.timeout}s: {e}")
        except requests.exceptions.ConnectionError as e:
            raise PluginConnectionError(f"Failed to connect to Blocker plugin: {e}")
        except requests.exceptions.RequestException as e:
            raise PluginError(f"Plugin request failed: {e}")

        try:
            data = response.json()
        except ValueError:
            data = {"Err": response.text} if response.status_code >= 400 else {}

        if data.get("Err") or response.status_code >= 400:
            raise PluginError(data.get("Err") or response.text, status_code=response.status_code)
        return data

    def create(self, name: str, opts: Optional[Dict[str, str]] = None) -> None:
        self._call("VolumeDriver.Create", {"Name": name, "Opts": opts or {}})

    def mount(self, name: str) -> str:
        return self._call("VolumeDriver.Mount", {"Name": name})["Mountpoint"]

    def path(self, name: str) -> str:
        return self._call("VolumeDriver.Path", {"Name": name})["Mountpoint"]

    def unmount(self, name: str) -> None:
        self._call("VolumeDriver.Unmount", {"Name": name})

    def remove(self, name: str) -> None:
        self._call("VolumeDriver.Remove", {"Name": name})

    def get(self, name: str) -> Dict[str, Any]:
        return self._call("VolumeDriver.Get", {"Name": name})["Volume"]

    def list(self) -> List[Dict[str, Any]]:
        return self._call("VolumeDriver.List").get("Volumes", [])

    def close(self):
        """Close the HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
