"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from compute_cli.client.http import ComputeClient
from compute_cli.config.manager import ConfigManager
from compute_cli.config.models import CloudProfile
from compute_cli.service import ComputeService

COMPUTE = "https://cloud:8774/v2.1"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests away from the user's real config and environment."""
    for var in ("COMPUTE_ENDPOINT", "COMPUTE_AUTH_TOKEN", "COMPUTE_PROFILE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(
        "compute_cli.config.manager.CONFIG_FILE", tmp_path / "user-config.toml",
    )


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Return a temporary config file path."""
    return tmp_path / "config.toml"


@pytest.fixture
def config_manager(tmp_config: Path) -> ConfigManager:
    """Return a ConfigManager pointed at a temp config file."""
    return ConfigManager(config_path=tmp_config)


@pytest.fixture
def sample_profile() -> CloudProfile:
    """Return a sample cloud profile for testing."""
    return CloudProfile(
        name="test-cloud",
        url=COMPUTE,
        token="gAAAAAtesttoken",
    )


@pytest.fixture
def client(sample_profile: CloudProfile):
    with ComputeClient(sample_profile) as c:
        yield c


@pytest.fixture
def service(client: ComputeClient) -> ComputeService:
    return ComputeService(client)


@pytest.fixture
def server_body() -> dict:
    """Sample server detail response."""
    return {
        "server": {
            "id": "9168b536-cd40-4630-b43f-b259807c6e87",
            "name": "web-1",
            "status": "ACTIVE",
            "hostId": "e3c1b8",
            "tenant_id": "6f70656e737461636b20342065766572",
            "user_id": "fake",
            "key_name": "deploy",
            "accessIPv4": "1.2.3.4",
            "flavor": {"id": "1", "links": []},
            "image": {"id": "70a599e0-31e7-49b7-b260-868f441e862b", "links": []},
            "addresses": {
                "private": [{"addr": "192.168.1.30", "version": 4}],
            },
            "metadata": {"role": "web"},
            "OS-EXT-STS:task_state": None,
            "OS-EXT-STS:vm_state": "active",
            "OS-EXT-STS:power_state": 1,
            "OS-EXT-AZ:availability_zone": "nova",
            "OS-DCF:diskConfig": "AUTO",
            "links": [
                {"rel": "self", "href": f"{COMPUTE}/servers/9168b536"},
                {"rel": "bookmark", "href": "https://cloud:8774/servers/9168b536"},
            ],
        }
    }


@pytest.fixture
def limits_body() -> dict:
    """Sample /limits response."""
    return {
        "limits": {
            "rate": [],
            "absolute": {
                "maxTotalCores": 20,
                "totalCoresUsed": 4,
                "maxTotalRAMSize": 51200,
                "totalRAMUsed": 8192,
                "maxTotalInstances": 10,
                "totalInstancesUsed": 2,
                "maxTotalKeypairs": 100,
                "maxServerMeta": 128,
                "maxServerGroups": 10,
                "totalServerGroupsUsed": 0,
                "maxServerGroupMembers": 10,
            },
        }
    }
