from __future__ import annotations

import logging
from typing import Any

import boto3

from .models import FilterSpec

logger = logging.getLogger(__name__)

STATE_FILTER_NAME = "instance-state-name"


def wildcard(pattern: str) -> str:
    return f"*{pattern}*"


def build_filters(spec: FilterSpec) -> list[dict[str, Any]]:
    """Translate a filter spec into ``DescribeInstances`` filter clauses.

    EC2 ANDs separate filters, so every tag clause and the state clause
    must match.
    """
    filters: list[dict[str, Any]] = [
        {"Name": f"tag:{tag.name}", "Values": [wildcard(tag.pattern)]} for tag in spec.tags
    ]
    if spec.state:
        filters.append({"Name": STATE_FILTER_NAME, "Values": [wildcard(spec.state)]})
    return filters


class Ec2InventoryService:
    def __init__(
        self,
        profile: str | None = None,
        region: str | None = None,
        client: Any | None = None,
    ) -> None:
        self.profile = profile
        self.region = region
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            session = boto3.Session(profile_name=self.profile, region_name=self.region)
            self._client = session.client("ec2")
        return self._client

    def describe_instances(self, filters: list[dict[str, Any]]) -> list[dict[str, Any]]:
        logger.debug("DescribeInstances filters: %s", filters)
        paginator = self.client.get_paginator("describe_instances")
        reservations: list[dict[str, Any]] = []
        for page in paginator.paginate(Filters=filters):
            reservations.extend(page.get("Reservations", []))
        logger.debug("DescribeInstances returned %d reservation(s)", len(reservations))
        return reservations
