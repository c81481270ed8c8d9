"""Tests for the boto3-backed EC2Manager using moto."""

from unittest.mock import MagicMock

import pytest
from moto import mock_aws

from ec2_automation.core.config import Configuration
from ec2_automation.core.runner import run
from ec2_automation.providers.aws.compute import EC2Manager
from ec2_automation.providers.aws.constants import ACTIVE_INSTANCE_STATES
from ec2_automation.providers.exceptions import ProviderAPIError, ProviderError


@pytest.fixture(scope="function")
def ec2_manager(aws_credentials):
    """Return EC2Manager backed by moto."""
    with mock_aws():
        yield EC2Manager(region="us-east-1")


@pytest.fixture
def launch(ec2_manager):
    """Launch a moto instance with the given tags and return its ID."""
    client = ec2_manager.ec2_client
    image_id = client.describe_images()["Images"][0]["ImageId"]

    def _launch(tags: dict[str, str], instance_type: str = "t3.micro") -> str:
        kwargs = {}
        if tags:
            kwargs["TagSpecifications"] = [
                {
                    "ResourceType": "instance",
                    "Tags": [{"Key": k, "Value": v} for k, v in tags.items()],
                }
            ]

        response = client.run_instances(
            ImageId=image_id,
            InstanceType=instance_type,
            MinCount=1,
            MaxCount=1,
            **kwargs,
        )
        return response["Instances"][0]["InstanceId"]

    return _launch


def test_ec2_manager_initialization(ec2_manager) -> None:
    assert ec2_manager.region == "us-east-1"
    assert ec2_manager.ec2_client is not None


def test_client_uses_region(aws_credentials) -> None:
    factory = MagicMock()

    EC2Manager(region="eu-west-1", boto3_client_factory=factory)

    factory.assert_called_once_with("ec2", region_name="eu-west-1")


def test_empty_region_defers_to_boto3_resolution(aws_credentials) -> None:
    factory = MagicMock()

    EC2Manager(region="", boto3_client_factory=factory)

    factory.assert_called_once_with("ec2", region_name=None)


def test_invalid_region_raises_provider_error(aws_credentials) -> None:
    with pytest.raises(ProviderError):
        EC2Manager(region="not a region!")


def test_describe_filters_by_exact_tag(ec2_manager, launch) -> None:
    managed = launch({"AutoManage": "true", "Name": "worker"})
    launch({"AutoManage": "false"})
    launch({})

    instances = ec2_manager.describe_instances_by_tag(
        "AutoManage", "true", ACTIVE_INSTANCE_STATES
    )

    assert [i.instance_id for i in instances] == [managed]
    assert instances[0].state == "running"
    assert instances[0].instance_type == "t3.micro"
    assert instances[0].name == "worker"


def test_describe_excludes_terminated_instances(ec2_manager, launch) -> None:
    kept = launch({"AutoManage": "true"})
    gone = launch({"AutoManage": "true"})
    ec2_manager.ec2_client.terminate_instances(InstanceIds=[gone])

    instances = ec2_manager.describe_instances_by_tag(
        "AutoManage", "true", ACTIVE_INSTANCE_STATES
    )

    assert [i.instance_id for i in instances] == [kept]


def test_name_defaults_when_tag_missing(ec2_manager, launch) -> None:
    launch({"AutoManage": "true"})

    (instance,) = ec2_manager.describe_instances_by_tag(
        "AutoManage", "true", ACTIVE_INSTANCE_STATES
    )

    assert instance.name == "N/A"


def test_stop_and_start_report_transitions(ec2_manager, launch) -> None:
    instance_id = launch({"AutoManage": "true"})

    (stopping,) = ec2_manager.stop_instances([instance_id])
    assert stopping.instance_id == instance_id
    assert stopping.previous_state == "running"
    assert stopping.current_state in ("stopping", "stopped")

    (starting,) = ec2_manager.start_instances([instance_id])
    assert starting.instance_id == instance_id
    assert starting.previous_state == "stopped"
    assert starting.current_state in ("pending", "running")


def test_unknown_instance_raises_api_error(ec2_manager) -> None:
    with pytest.raises(ProviderAPIError) as exc_info:
        ec2_manager.stop_instances(["i-1234567890abcdef0"])

    assert exc_info.value.error_code.startswith("InvalidInstanceID")


def test_run_end_to_end_starts_only_stopped(ec2_manager, launch) -> None:
    stopped = launch({"AutoManage": "true"})
    running = launch({"AutoManage": "true"})
    ec2_manager.ec2_client.stop_instances(InstanceIds=[stopped])

    result = run(Configuration(action="start"), lambda region: ec2_manager)

    assert result.targeted == [stopped]
    assert [t.instance_id for t in result.transitions] == [stopped]

    states = {
        i.instance_id: i.state
        for i in ec2_manager.describe_instances_by_tag(
            "AutoManage", "true", ACTIVE_INSTANCE_STATES
        )
    }
    assert states[running] == "running"
    assert states[stopped] in ("pending", "running")


def test_run_end_to_end_dry_run_leaves_instances(ec2_manager, launch) -> None:
    running = launch({"AutoManage": "true"})

    result = run(Configuration(action="stop", dry_run=True), lambda region: ec2_manager)

    assert result.targeted == [running]
    (instance,) = ec2_manager.describe_instances_by_tag(
        "AutoManage", "true", ACTIVE_INSTANCE_STATES
    )
    assert instance.state == "running"
