"""Test fake implementations for dependency injection testing."""

from tests.unit.fakes.fake_ec2_manager import FakeEC2Manager

__all__ = ["FakeEC2Manager"]
