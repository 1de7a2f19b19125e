from __future__ import annotations

from typing import Any

import pytest


class FakeTerminal:
    def bold(self, text: str) -> str:
        return f"<b>{text}</b>"

    def color(self, text: str, name: str) -> str:
        return f"<{name}>{text}</{name}>"


def make_instance(
    instance_id: str,
    state: str,
    tags: dict[str, str] | None = None,
    private_ip: str | None = None,
    instance_type: str = "t2.micro",
) -> dict[str, Any]:
    instance: dict[str, Any] = {
        "InstanceId": instance_id,
        "InstanceType": instance_type,
        "State": {"Code": 16 if state == "running" else 80, "Name": state},
        "Tags": [{"Key": key, "Value": value} for key, value in (tags or {}).items()],
    }
    if private_ip is not None:
        instance["PrivateIpAddress"] = private_ip
    return instance


@pytest.fixture
def fake_terminal() -> FakeTerminal:
    return FakeTerminal()


@pytest.fixture
def web_reservations() -> list[dict[str, Any]]:
    return [
        {
            "ReservationId": "r-2",
            "Instances": [
                make_instance("i-2", "stopped", {"Name": "web-2"}, "10.0.0.2"),
            ],
        },
        {
            "ReservationId": "r-1",
            "Instances": [
                make_instance("i-1", "running", {"Name": "web-1"}, "10.0.0.1"),
            ],
        },
    ]
