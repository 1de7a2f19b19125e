from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from .models import DEFAULT_TAG, InstanceRecord

logger = logging.getLogger(__name__)


def project_instances(
    reservations: Iterable[dict[str, Any]],
    tag_names: Sequence[str],
) -> list[InstanceRecord]:
    """Flatten reservations into records sorted by the Name tag.

    Missing names sort as the empty string; the sort is stable so ties keep
    the provider's order.
    """
    records = [
        _to_record(instance, tag_names)
        for reservation in reservations
        for instance in reservation.get("Instances", [])
    ]
    records.sort(key=lambda record: record.sort_key)
    logger.debug("Projected %d instance record(s)", len(records))
    return records


def _to_record(instance: dict[str, Any], tag_names: Sequence[str]) -> InstanceRecord:
    tags = _tag_map(instance.get("Tags", []))
    return InstanceRecord(
        instance_id=instance.get("InstanceId", ""),
        private_ip=instance.get("PrivateIpAddress"),
        name=tags.get(DEFAULT_TAG),
        instance_type=instance.get("InstanceType", ""),
        state=instance.get("State", {}).get("Name", ""),
        tags={name: tags.get(name) for name in tag_names},
    )


def _tag_map(tags: Iterable[dict[str, str]]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for tag in tags:
        key = tag.get("Key")
        if key is not None and key not in mapping:
            mapping[key] = tag.get("Value", "")
    return mapping
