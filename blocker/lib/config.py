"""
Configuration loader for Blocker.

Defaults match a stock EC2 host; the config file only needs to carry values
that differ (e.g. a pinned region for development hosts outside EC2).
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path


DEFAULT_CONFIG_PATH = Path("/etc/blocker/blocker.conf")


@dataclass(frozen=True)
class BlockerConfig:
    mount_base: str = "/mnt/blocker"
    device_root: str = "/dev"
    device_letters: str = "fghijklmnop"  # /dev/sd[f-p]
    fs_type: str = ""  # empty lets mount(8) autodetect
    poll_attempts: int = 12
    poll_interval: int = 5
    api_host: str = "127.0.0.1"
    api_port: int = 8080
    instance_id: str = ""
    region: str = ""
    availability_zone: str = ""
    metadata_endpoint: str = "http://169.254.169.254"
    metadata_timeout: int = 2


def _config_path() -> Path:
    env = os.environ.get("BLOCKER_CONFIG_PATH")
    if env:
        return Path(env)
    return DEFAULT_CONFIG_PATH


def _read_ini(path: Path) -> configparser.ConfigParser:
    parser = configparser.ConfigParser()
    if path.exists():
        parser.read(path, encoding="utf-8")
    return parser


def load_config() -> BlockerConfig:
    """
    Load config from `BLOCKER_CONFIG_PATH` or `/etc/blocker/blocker.conf`.

    Missing files are not an error; defaults are returned.
    """
    parser = _read_ini(_config_path())
    section = parser["blocker"] if parser.has_section("blocker") else {}

    def _get(key: str, default: str) -> str:
        if isinstance(section, dict):
            return str(section.get(key, default)).strip()
        return str(section.get(key, fallback=default)).strip()

    def _get_int(key: str, default: int) -> int:
        raw = _get(key, str(default))
        try:
            return int(raw)
        except Exception:
            return default

    def _parse_letters(raw: str) -> str:
        letters = [c for c in raw.lower() if "a" <= c <= "z"]
        # de-duplicate, keep order
        seen: list[str] = []
        for c in letters:
            if c not in seen:
                seen.append(c)
        return "".join(seen) or "fghijklmnop"

    return BlockerConfig(
        mount_base=_get("mount_base", "/mnt/blocker").rstrip("/") or "/mnt/blocker",
        device_root=_get("device_root", "/dev").rstrip("/") or "/dev",
        device_letters=_parse_letters(_get("device_letters", "fghijklmnop")),
        fs_type=_get("fs_type", ""),
        poll_attempts=max(1, _get_int("poll_attempts", 12)),
        poll_interval=max(0, _get_int("poll_interval", 5)),
        api_host=_get("api_host", "127.0.0.1"),
        api_port=_get_int("api_port", 8080),
        instance_id=_get("instance_id", ""),
        region=_get("region", ""),
        availability_zone=_get("availability_zone", ""),
        metadata_endpoint=_get("metadata_endpoint", "http://169.254.169.254").rstrip("/"),
        metadata_timeout=_get_int("metadata_timeout", 2),
    )
