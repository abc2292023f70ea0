"""Example FastAPI application serving CloudWatch series.

Run with:
    AWS_ACCESS_KEY_ID=... AWS_SECRET_ACCESS_KEY=... AWS_REGION=us-east-1 \
        uvicorn examples.fastapi_example:app --reload

Without credentials the app serves generated demo data for instance
"i-0demo" (also reachable by its name, "demo").

Endpoints:
    /metrics/find?query=<pattern>         - schema paths matching a pattern
    /render?target=<t>&from=<ts>&until=<ts> - series for one or more targets
"""

import logging
import math
import os
import time

from fastapi import FastAPI

from cloudseries.adapters.cloudwatch import cloudwatch_connector
from cloudseries.adapters.frameworks.fastapi import create_series_router
from cloudseries.adapters.storage.in_memory import (
    InMemoryMetricFetcher,
    StaticIdentifierResolver,
)
from cloudseries.core.connector import CloudWatchConnector
from cloudseries.core.finder import TreeFinder
from cloudseries.core.models import Datapoint
from cloudseries.core.schema import build_schema

logging.basicConfig(level=logging.INFO)


def demo_connector() -> CloudWatchConnector:
    """Connector over a day of synthetic CPU datapoints."""
    now = int(time.time())
    fetcher = InMemoryMetricFetcher()
    fetcher.add(
        "AWS/EC2",
        "InstanceId",
        "i-0demo",
        "CPUUtilization",
        [
            Datapoint(
                timestamp=ts,
                average=50 + 40 * math.sin(ts / 3600),
                maximum=90.0,
                minimum=10.0,
                sum=100.0,
                sample_count=5.0,
            )
            for ts in range(now - 86400, now, 300)
        ],
    )
    resolver = StaticIdentifierResolver({"InstanceId": {"demo": "i-0demo"}})
    return CloudWatchConnector(TreeFinder(build_schema()), fetcher, resolver)


def create_app(connector: CloudWatchConnector) -> FastAPI:
    """Create the app around an explicitly constructed connector."""
    app = FastAPI(title="cloudseries example")
    app.include_router(create_series_router(connector))
    return app


if "AWS_ACCESS_KEY_ID" in os.environ:
    connector = cloudwatch_connector(
        os.environ["AWS_ACCESS_KEY_ID"],
        os.environ["AWS_SECRET_ACCESS_KEY"],
        region_name=os.environ.get("AWS_REGION"),
    )
else:
    connector = demo_connector()

app = create_app(connector)
