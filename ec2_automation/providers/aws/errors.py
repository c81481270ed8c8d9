"""Translation of botocore exceptions into provider exceptions."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    EndpointConnectionError,
    NoCredentialsError,
    PartialCredentialsError,
    ReadTimeoutError,
)

from ec2_automation.providers.exceptions import (
    ProviderAPIError,
    ProviderConnectionError,
    ProviderCredentialsError,
    ProviderError,
)


@contextmanager
def handle_aws_errors() -> Generator[None, None, None]:
    """Re-raise botocore exceptions as provider exceptions.

    Raises
    ------
    ProviderCredentialsError
        If AWS credentials are missing or incomplete
    ProviderConnectionError
        If the EC2 endpoint cannot be reached or times out
    ProviderAPIError
        If the EC2 API returns an error response
    ProviderError
        For any other botocore failure
    """
    try:
        yield
    except (NoCredentialsError, PartialCredentialsError) as e:
        raise ProviderCredentialsError(str(e)) from e
    except (EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError) as e:
        raise ProviderConnectionError(str(e)) from e
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code")
        raise ProviderAPIError(str(e), error_code=error_code) from e
    except BotoCoreError as e:
        raise ProviderError(str(e)) from e
