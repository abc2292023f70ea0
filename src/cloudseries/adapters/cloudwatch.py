"""AWS adapters for the fetch and name lookup ports.

Blocking boto3 calls run in a worker thread so that several leaves of one
target can be fetched concurrently.
"""

import asyncio
import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from cloudseries.core.config import ConnectorConfig
from cloudseries.core.connector import CloudWatchConnector
from cloudseries.core.errors import CollaboratorError
from cloudseries.core.finder import TreeFinder
from cloudseries.core.models import Datapoint
from cloudseries.core.schema import build_schema

logger = logging.getLogger(__name__)

LIVE_STATES = ["pending", "running", "stopping", "stopped"]


def _to_datapoint(raw: dict[str, Any]) -> Datapoint:
    """Convert a datapoint dict from the CloudWatch API."""
    timestamp: datetime = raw["Timestamp"]
    return Datapoint(
        timestamp=int(timestamp.timestamp()),
        sum=raw.get("Sum"),
        minimum=raw.get("Minimum"),
        maximum=raw.get("Maximum"),
        average=raw.get("Average"),
        sample_count=raw.get("SampleCount"),
        unit=raw.get("Unit"),
    )


class CloudWatchMetricFetcher:
    """MetricFetcherPort backed by CloudWatch GetMetricStatistics.

    Args:
        client: A boto3 CloudWatch client.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    async def fetch(
        self,
        namespace: str,
        dimension_name: str,
        dimension_value: str,
        metric_name: str,
        statistic: str,
        start: int,
        end: int,
        step: int,
    ) -> Sequence[Datapoint]:
        """Fetch one statistic of one metric.

        Raises:
            CollaboratorError: If the AWS call fails.
        """
        request = {
            "Namespace": namespace,
            "MetricName": metric_name,
            "Dimensions": [{"Name": dimension_name, "Value": dimension_value}],
            "Statistics": [statistic],
            "StartTime": datetime.fromtimestamp(start, tz=UTC),
            "EndTime": datetime.fromtimestamp(end, tz=UTC),
            "Period": int(step),
        }
        try:
            response = await asyncio.to_thread(
                self._client.get_metric_statistics, **request
            )
        except (BotoCoreError, ClientError) as e:
            raise CollaboratorError(
                f"GetMetricStatistics failed for {namespace} {metric_name}"
            ) from e
        return [_to_datapoint(raw) for raw in response.get("Datapoints", [])]


class EC2IdentifierResolver:
    """IdentifierResolverPort looking up EC2 resources by their Name tag.

    Supports the InstanceId and VolumeId dimensions. Other dimensions
    never resolve.

    Args:
        client: A boto3 EC2 client.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    def _lookup(self, name: str, dimension_name: str) -> str | None:
        filters = [{"Name": "tag:Name", "Values": [name]}]
        if dimension_name == "InstanceId":
            # Terminated instances keep their tags for a while
            response = self._client.describe_instances(
                Filters=[
                    *filters,
                    {"Name": "instance-state-name", "Values": LIVE_STATES},
                ]
            )
            for reservation in response.get("Reservations", []):
                for instance in reservation.get("Instances", []):
                    return str(instance["InstanceId"])
            return None
        if dimension_name == "VolumeId":
            response = self._client.describe_volumes(Filters=filters)
            for volume in response.get("Volumes", []):
                return str(volume["VolumeId"])
            return None
        logger.debug(
            "No name lookup for dimension", extra={"dimension_name": dimension_name}
        )
        return None

    async def resolve_identifier(self, name: str, dimension_name: str) -> str | None:
        """Return the identifier of the first resource tagged with ``name``.

        Raises:
            CollaboratorError: If the AWS call fails.
        """
        try:
            return await asyncio.to_thread(self._lookup, name, dimension_name)
        except (BotoCoreError, ClientError) as e:
            raise CollaboratorError(f"Name lookup failed for {name!r}") from e


def session(
    access_key: str, secret_key: str, region_name: str | None = None
) -> boto3.session.Session:
    """Create a boto3 session from basic access key credentials."""
    return boto3.session.Session(
        aws_access_key_id=access_key,
        aws_secret_access_key=secret_key,
        region_name=region_name,
    )


def cloudwatch_connector(
    access_key: str,
    secret_key: str,
    region_name: str | None = None,
    config: ConnectorConfig | None = None,
) -> CloudWatchConnector:
    """Create a connector over the default schema backed by AWS.

    Args:
        access_key: AWS access key id.
        secret_key: AWS secret access key.
        region_name: AWS region (defaults to the boto3 configuration).
        config: Connector settings.

    Returns:
        CloudWatchConnector using CloudWatch for datapoints and EC2 for
        name lookups.
    """
    aws = session(access_key, secret_key, region_name)
    return CloudWatchConnector(
        finder=TreeFinder(build_schema()),
        fetcher=CloudWatchMetricFetcher(aws.client("cloudwatch")),
        resolver=EC2IdentifierResolver(aws.client("ec2")),
        config=config,
    )
