"""CLI entry point for ec2_automation."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping, Sequence
from typing import Any

import fire

from ec2_automation.cli.parsing import build_cli_overrides, quote_text_flags
from ec2_automation.constants import (
    ENV_DEBUG,
    EXIT_CONFIG_ERROR,
    EXIT_GENERAL_ERROR,
)
from ec2_automation.core.config import ConfigLoader
from ec2_automation.core.errors import (
    AutomationError,
    ClientInitializationError,
    InvalidConfigurationError,
)
from ec2_automation.core.runner import ComputeProviderFactory, run
from ec2_automation.logging import configure_logging, get_invocation_logger
from ec2_automation.providers.aws.utils import get_aws_credentials_error_message
from ec2_automation.providers.exceptions import (
    ProviderAPIError,
    ProviderConnectionError,
    ProviderCredentialsError,
)

logger = logging.getLogger(__name__)


class EC2AutomationCLI:
    """Command-line front end around the shared run operation.

    Parameters
    ----------
    compute_provider_factory : Callable[[str], ComputeProvider] | None
        Optional factory for the compute provider. If None, uses EC2.
    environ : Mapping[str, str] | None
        Environment used for overrides and the config file path
    """

    def __init__(
        self,
        compute_provider_factory: ComputeProviderFactory | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._compute_provider_factory = compute_provider_factory
        self._config_loader = ConfigLoader(environ=environ)

    def manage(
        self,
        action: Any = None,
        tag_key: Any = None,
        tag_value: Any = None,
        region: Any = None,
        dry_run: str | bool | None = None,
    ) -> None:
        """List, start or stop EC2 instances selected by tag.

        Parameters
        ----------
        action : str
            Action to perform: list, start, stop (default: list)
        tag_key : str
            Tag key to filter instances (default: AutoManage)
        tag_value : str
            Tag value to filter instances (default: true)
        region : str
            AWS region (default: us-east-1)
        dry_run : bool
            Perform a dry run without making changes

        Raises
        ------
        AutomationError
            If configuration, client creation, query or action fails
        """
        overrides = build_cli_overrides(action, tag_key, tag_value, region, dry_run)
        config = self._config_loader.build(overrides)

        run(
            config,
            compute_provider_factory=self._compute_provider_factory,
            logger=get_invocation_logger(),
        )


def handle_configuration_error(error: InvalidConfigurationError, debug_mode: bool) -> None:
    """Handle invalid configuration.

    Parameters
    ----------
    error : InvalidConfigurationError
        The configuration error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    InvalidConfigurationError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise error

    logger.error("Invalid configuration: %s", error)
    sys.exit(EXIT_CONFIG_ERROR)


def handle_client_error(error: ClientInitializationError, debug_mode: bool) -> None:
    """Handle failure to construct the EC2 client.

    Parameters
    ----------
    error : ClientInitializationError
        The initialization error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ClientInitializationError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise error

    logger.error("%s", error)
    print("\nCheck the region and your AWS configuration:", file=sys.stderr)
    print("  ec2-automation -region us-east-1", file=sys.stderr)
    print("  aws configure list", file=sys.stderr)
    sys.exit(EXIT_GENERAL_ERROR)


def handle_automation_error(error: AutomationError, debug_mode: bool) -> None:
    """Handle query and action failures with context-specific hints.

    Parameters
    ----------
    error : AutomationError
        The error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    AutomationError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise error

    logger.error("%s", error)
    cause = error.cause

    if isinstance(cause, ProviderCredentialsError):
        print(f"\n{get_aws_credentials_error_message()}", file=sys.stderr)
    elif isinstance(cause, ProviderAPIError) and cause.error_code == "UnauthorizedOperation":
        print("\nInsufficient IAM permissions. Required:", file=sys.stderr)
        print("  - ec2:DescribeInstances", file=sys.stderr)
        print("  - ec2:StartInstances", file=sys.stderr)
        print("  - ec2:StopInstances", file=sys.stderr)
    elif isinstance(cause, ProviderAPIError) and cause.error_code in [
        "ExpiredToken",
        "RequestExpired",
        "ExpiredTokenException",
    ]:
        print("\nAWS credentials have expired. Refresh them with:", file=sys.stderr)
        print("  aws sso login", file=sys.stderr)
    elif isinstance(cause, ProviderConnectionError):
        print("\nCould not reach the EC2 endpoint. Check network access.", file=sys.stderr)

    sys.exit(EXIT_GENERAL_ERROR)


def main(
    argv: Sequence[str] | None = None,
    compute_provider_factory: ComputeProviderFactory | None = None,
) -> None:
    """Entry point for the Fire CLI with graceful error handling.

    Parameters
    ----------
    argv : Sequence[str] | None
        Command-line arguments. If None, Fire reads ``sys.argv``.
    compute_provider_factory : Callable[[str], ComputeProvider] | None
        Optional factory for the compute provider. If None, uses EC2.

    Notes
    -----
    Flags may be given with one or two dashes (``-action start`` or
    ``--action=start``). Environment variables AWS_REGION, EC2_TAG_KEY and
    EC2_TAG_VALUE override the corresponding flags when non-empty.
    Text flag values are passed through exactly as typed.
    """
    configure_logging()

    debug_mode = os.environ.get(ENV_DEBUG) == "1"
    cli = EC2AutomationCLI(compute_provider_factory=compute_provider_factory)
    command = quote_text_flags(sys.argv[1:] if argv is None else argv)

    try:
        fire.Fire(
            cli.manage,
            command=command,
            name="ec2-automation",
        )
    except InvalidConfigurationError as e:
        handle_configuration_error(e, debug_mode)
    except ClientInitializationError as e:
        handle_client_error(e, debug_mode)
    except AutomationError as e:
        handle_automation_error(e, debug_mode)
