"""Pytest configuration and fixtures for ec2_automation tests."""

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import yaml

from ec2_automation.core.models import Instance
from tests.unit.fakes import FakeEC2Manager

MANAGED_TAGS = {"AutoManage": "true"}


@pytest.fixture(autouse=True)
def clean_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """Run each test without override variables or a stray config file.

    Yields
    ------
    None
        Control back to test after clearing the environment
    """
    for name in (
        "AWS_REGION",
        "EC2_TAG_KEY",
        "EC2_TAG_VALUE",
        "EC2_AUTOMATION_CONFIG",
        "EC2_AUTOMATION_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)

    monkeypatch.chdir(tmp_path)

    yield


@pytest.fixture
def aws_credentials() -> Generator[None, None, None]:
    """Fixture to set AWS credentials for testing with proper cleanup.

    Yields
    ------
    None
        Control back to test after setting credentials
    """
    old_values = {
        name: os.environ.get(name)
        for name in ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_DEFAULT_REGION")
    }

    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"

    yield

    for name, value in old_values.items():
        if value is not None:
            os.environ[name] = value
        else:
            os.environ.pop(name, None)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Path of a temporary YAML config file (not yet written)."""
    return tmp_path / "ec2-automation.yaml"


@pytest.fixture
def write_config(config_file: Path) -> Callable[[dict[str, Any]], Path]:
    """Helper fixture to write config data to file.

    Parameters
    ----------
    config_file : Path
        Path to config file from config_file fixture

    Returns
    -------
    callable
        Function that takes config_data dict and writes to file
    """

    def _write(config_data: dict[str, Any]) -> Path:
        with open(config_file, "w") as f:
            yaml.dump(config_data, f)
        return config_file

    return _write


@pytest.fixture
def mixed_instances() -> list[Instance]:
    """Managed instances in every active state plus one unmanaged instance."""
    return [
        Instance("i-1", "stopped", "t3.micro", {**MANAGED_TAGS, "Name": "web"}),
        Instance("i-2", "running", "t3.small", dict(MANAGED_TAGS)),
        Instance("i-3", "pending", "t3.micro", dict(MANAGED_TAGS)),
        Instance("i-4", "stopping", "t3.micro", dict(MANAGED_TAGS)),
        Instance("i-5", "running", "t3.micro", {"AutoManage": "false"}),
    ]


@pytest.fixture
def fake_ec2(mixed_instances: list[Instance]) -> FakeEC2Manager:
    """FakeEC2Manager holding the mixed instance set."""
    return FakeEC2Manager(region="us-east-1", instances=mixed_instances)


@pytest.fixture
def fake_factory(fake_ec2: FakeEC2Manager) -> Callable[[str], FakeEC2Manager]:
    """Compute provider factory returning ``fake_ec2`` and recording regions."""
    regions: list[str] = []

    def _factory(region: str) -> FakeEC2Manager:
        regions.append(region)
        fake_ec2.region = region
        return fake_ec2

    _factory.regions = regions
    return _factory
