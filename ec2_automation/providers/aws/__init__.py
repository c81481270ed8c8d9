"""AWS provider implementation."""

from __future__ import annotations

from ec2_automation.providers.aws.compute import EC2Manager

__all__ = ["EC2Manager"]
