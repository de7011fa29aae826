"""Pytest configuration and fixtures."""

import ipaddress
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from code_registry.registry.storage import CodeRegistry

T0 = 1_700_000_000_123_456_789


class FakeClock:
    """Deterministic nanosecond clock; each reading advances by one second."""

    def __init__(self, start: int = T0, step: int = 1_000_000_000):
        self.now = start
        self.step = step
        self.readings: list[int] = []

    def __call__(self) -> int:
        reading = self.now
        self.readings.append(reading)
        self.now += self.step
        return reading


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def snapshot_path(temp_dir: Path) -> Path:
    """Snapshot file location inside the temporary directory."""
    return temp_dir / "codes.json"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry(snapshot_path: Path, clock: FakeClock) -> CodeRegistry:
    """A loaded, empty registry writing to a temporary snapshot."""
    reg = CodeRegistry(snapshot_path, clock=clock)
    reg.load()
    return reg


def ip(value: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address:
    return ipaddress.ip_address(value)
