from __future__ import annotations

import pytest
from botocore.exceptions import ClientError, NoCredentialsError

from ec2_list import app
from ec2_list.arg_parser import parse_args
from ec2_list.config import ListConfig


class FakeService:
    reservations: list = []
    error: Exception | None = None
    calls: list = []

    def __init__(self, profile=None, region=None) -> None:
        self.profile = profile
        self.region = region

    def describe_instances(self, filters):
        FakeService.calls.append(filters)
        if FakeService.error is not None:
            raise FakeService.error
        return FakeService.reservations


@pytest.fixture
def fake_service(monkeypatch, web_reservations):
    FakeService.reservations = web_reservations
    FakeService.error = None
    FakeService.calls = []
    monkeypatch.setattr(app, "Ec2InventoryService", FakeService)
    return FakeService


@pytest.fixture
def no_config(tmp_path):
    return tmp_path / "missing.yaml"


def test_help_prints_usage_without_querying(fake_service, no_config, capsys) -> None:
    assert app.main(["-env", "prod", "--help"], config_path=no_config) == 0

    assert capsys.readouterr().out.startswith("Usage: ec2-list")
    assert fake_service.calls == []


def test_report_lists_sorted_instances(fake_service, no_config, capsys) -> None:
    assert app.main(["web", "--no-color"], config_path=no_config) == 0

    lines = capsys.readouterr().out.splitlines()
    assert fake_service.calls == [[{"Name": "tag:Name", "Values": ["*web*"]}]]
    assert lines[0].split() == ["State", "Type", "Id", "Private", "IP", "Name"]
    assert lines[1].split() == ["running", "t2.micro", "i-1", "10.0.0.1", "web-1"]
    assert lines[2].split() == ["stopped", "t2.micro", "i-2", "10.0.0.2", "web-2"]


def test_ip_only_output(fake_service, no_config, capsys) -> None:
    assert app.main(["--ip-only"], config_path=no_config) == 0

    assert capsys.readouterr().out == "10.0.0.1\n10.0.0.2\n"


def test_client_error_passes_message_through(fake_service, no_config, capsys) -> None:
    fake_service.error = ClientError(
        {"Error": {"Code": "AuthFailure", "Message": "AWS was not able to validate the credentials"}},
        "DescribeInstances",
    )

    assert app.main([], config_path=no_config) == app.EXIT_SERVICE_ERROR

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "AWS was not able to validate the credentials" in captured.err


def test_botocore_error_exits_with_failure(fake_service, no_config, capsys) -> None:
    fake_service.error = NoCredentialsError()

    assert app.main([], config_path=no_config) == app.EXIT_FAILURE
    assert "Unable to locate credentials" in capsys.readouterr().err


def test_config_supplies_profile_and_disables_headers(fake_service, tmp_path, monkeypatch, capsys) -> None:
    built: list[FakeService] = []

    class RecordingService(FakeService):
        def __init__(self, profile=None, region=None) -> None:
            super().__init__(profile, region)
            built.append(self)

    monkeypatch.setattr(app, "Ec2InventoryService", RecordingService)
    path = tmp_path / "ec2-list.yaml"
    path.write_text("profile: ops\nregion: us-west-2\nheaders: false\n", encoding="utf-8")

    assert app.main(["web"], config_path=path) == 0

    assert (built[0].profile, built[0].region) == ("ops", "us-west-2")
    assert capsys.readouterr().out.splitlines()[0].startswith("running")


def test_command_line_flags_override_config() -> None:
    spec = app.apply_config(parse_args(["--ip-only", "--no-color"]), ListConfig(color=True, headers=True))

    assert not spec.display.headers
    assert not spec.display.color
    assert spec.display.ip_only


def test_config_can_disable_color() -> None:
    spec = app.apply_config(parse_args([]), ListConfig(color=False))

    assert not spec.display.color
    assert spec.display.headers


def test_closed_pipe_exits_quietly(fake_service, no_config, monkeypatch, capsys) -> None:
    def closed_pipe(spec, service, stream=None):
        raise BrokenPipeError

    monkeypatch.setattr(app, "run", closed_pipe)

    assert app.main(["-I"], config_path=no_config) == 0
    assert capsys.readouterr().err == ""
