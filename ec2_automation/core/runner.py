"""Single internal run operation shared by every entry point."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ec2_automation.core.config import Configuration
from ec2_automation.core.errors import ClientInitializationError
from ec2_automation.core.interfaces import ComputeProvider
from ec2_automation.core.manager import InstanceManager
from ec2_automation.core.models import ManageResult
from ec2_automation.providers.aws.compute import EC2Manager
from ec2_automation.providers.exceptions import ProviderError

ComputeProviderFactory = Callable[[str], ComputeProvider]


def create_compute_provider(region: str) -> ComputeProvider:
    """Create the default EC2-backed compute provider for ``region``."""
    return EC2Manager(region=region)


def run(
    config: Configuration,
    compute_provider_factory: ComputeProviderFactory | None = None,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> ManageResult:
    """Validate the configuration, build the provider and manage instances.

    Parameters
    ----------
    config : Configuration
        Configuration to execute
    compute_provider_factory : Callable[[str], ComputeProvider] | None
        Factory receiving the region. Defaults to the EC2 provider.
    logger : logging.Logger | logging.LoggerAdapter | None
        Invocation-scoped logger passed to the instance manager

    Returns
    -------
    ManageResult
        Result of the manage operation

    Raises
    ------
    InvalidConfigurationError
        If the configuration is invalid; raised before any provider call
    ClientInitializationError
        If the compute provider cannot be constructed
    QueryError
        If querying instances fails
    ActionError
        If the start or stop request fails
    """
    config.validate()

    factory = compute_provider_factory or create_compute_provider

    try:
        compute_provider = factory(config.region)
    except ProviderError as e:
        raise ClientInitializationError(
            "Failed to initialize EC2 manager", cause=e
        ) from e

    return InstanceManager(compute_provider, logger=logger).manage(config)
