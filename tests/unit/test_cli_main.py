"""Unit tests for azredis.cli.main."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from azredis import __version__
from azredis.cli.main import cli
from azredis.observability.logging import setup_logging

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_MANIFEST = """\
apiVersion: cache.azure.crossplane.io/v1alpha3
kind: Redis
metadata:
  name: example
spec:
  forProvider:
    location: us-east1
    sku:
      name: basic
      family: C
      capacity: 1
    subnetId: coolsubnet
    enableNonSslPort: true
    shardCount: 3
"""


def _observed(shard_count: int = 3) -> dict[str, object]:
    return {
        "location": "us-east1",
        "tags": {"env": "prod"},
        "properties": {
            "sku": {"name": "basic", "family": "C", "capacity": 1},
            "subnetId": "coolsubnet",
            "enableNonSslPort": True,
            "shardCount": shard_count,
            "provisioningState": "Succeeded",
            "hostName": "example.redis.cache.windows.net",
            "port": 6379,
            "sslPort": 6380,
        },
    }


@pytest.fixture(autouse=True)
def _quiet_logs(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("AZREDIS_LOG_LEVEL", "error")
    monkeypatch.delenv("AZREDIS_LATE_INIT_ENABLED", raising=False)
    monkeypatch.delenv("AZREDIS_OUTPUT_INDENT", raising=False)
    yield
    setup_logging(level="error")


@pytest.fixture
def manifest_path(tmp_path: Path) -> Path:
    path = tmp_path / "redis.yaml"
    path.write_text(_MANIFEST, encoding="utf-8")
    return path


def _write_observed(tmp_path: Path, shard_count: int = 3) -> Path:
    path = tmp_path / "observed.json"
    path.write_text(json.dumps(_observed(shard_count)), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


class TestVersionCommand:
    def test_prints_version(self) -> None:
        result = CliRunner().invoke(cli, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output
        assert "azredis" in result.output


# ---------------------------------------------------------------------------
# azredis plan
# ---------------------------------------------------------------------------


class TestPlanCommand:
    def test_create_when_no_observed(self, manifest_path: Path) -> None:
        result = CliRunner().invoke(cli, ["plan", str(manifest_path), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["action"] == "create"
        assert data["observation"] is None
        assert data["request"] == {
            "location": "us-east1",
            "properties": {
                "sku": {"name": "basic", "family": "C", "capacity": 1},
                "subnetId": "coolsubnet",
                "enableNonSslPort": True,
                "shardCount": 3,
            },
        }

    def test_update_on_drift(self, manifest_path: Path, tmp_path: Path) -> None:
        observed = _write_observed(tmp_path, shard_count=5)
        result = CliRunner().invoke(cli, ["plan", str(manifest_path), "--observed", str(observed), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["action"] == "update"
        assert data["drift"] == [{"field": "shard_count", "desired": "3", "observed": "5"}]
        assert "subnetId" not in data["request"]["properties"]
        assert data["request"]["tags"] == {"env": "prod"}
        assert data["observation"]["provisioningState"] == "Succeeded"

    def test_noop_when_in_sync(self, manifest_path: Path, tmp_path: Path) -> None:
        observed = _write_observed(tmp_path)
        result = CliRunner().invoke(cli, ["plan", str(manifest_path), "--observed", str(observed), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["action"] == "noop"
        assert data["request"] is None
        assert data["lateInitialized"] == ["tags"]

    def test_no_late_init_flag(self, manifest_path: Path, tmp_path: Path) -> None:
        observed = _write_observed(tmp_path)
        result = CliRunner().invoke(
            cli, ["plan", str(manifest_path), "--observed", str(observed), "--no-late-init", "--json"]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["lateInitialized"] == []

    def test_late_init_disabled_by_env(
        self, manifest_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("AZREDIS_LATE_INIT_ENABLED", "false")
        observed = _write_observed(tmp_path)
        result = CliRunner().invoke(cli, ["plan", str(manifest_path), "--observed", str(observed), "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["lateInitialized"] == []

    def test_human_output_noop(self, manifest_path: Path, tmp_path: Path) -> None:
        observed = _write_observed(tmp_path)
        result = CliRunner().invoke(cli, ["plan", str(manifest_path), "--observed", str(observed)])
        assert result.exit_code == 0, result.output
        assert "NOOP" in result.output
        assert "No drift." in result.output
        assert "tags" in result.output

    def test_human_output_update(self, manifest_path: Path, tmp_path: Path) -> None:
        observed = _write_observed(tmp_path, shard_count=5)
        result = CliRunner().invoke(cli, ["plan", str(manifest_path), "--observed", str(observed)])
        assert result.exit_code == 0, result.output
        assert "UPDATE" in result.output
        assert "shard_count: 5 -> 3" in result.output
        assert "Request:" in result.output

    def test_plan_log_event_names_the_resource(
        self, manifest_path: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("AZREDIS_LOG_LEVEL", "info")
        observed = _write_observed(tmp_path)
        result = CliRunner().invoke(cli, ["plan", str(manifest_path), "--observed", str(observed)])
        assert result.exit_code == 0, result.output
        events = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
        [event] = [e for e in events if e.get("event") == "plan computed"]
        assert event["resource"] == "example"
        assert event["action"] == "noop"

    def test_missing_manifest_fails(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(cli, ["plan", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 1
        assert "Cannot read" in result.output

    def test_invalid_manifest_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("spec:\n  forProvider:\n    location: x\n", encoding="utf-8")
        result = CliRunner().invoke(cli, ["plan", str(path)])
        assert result.exit_code == 1
        assert "Invalid manifest" in result.output

    def test_unparseable_manifest_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("spec: [unclosed\n", encoding="utf-8")
        result = CliRunner().invoke(cli, ["plan", str(path)])
        assert result.exit_code == 1
        assert "Cannot parse" in result.output

    def test_invalid_observed_fails(self, manifest_path: Path, tmp_path: Path) -> None:
        path = tmp_path / "observed.json"
        path.write_text(json.dumps({"properties": {"port": "nope"}}), encoding="utf-8")
        result = CliRunner().invoke(cli, ["plan", str(manifest_path), "--observed", str(path)])
        assert result.exit_code == 1
        assert "Invalid provider resource" in result.output

    def test_invalid_log_level_fails(self, manifest_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AZREDIS_LOG_LEVEL", "trace")
        result = CliRunner().invoke(cli, ["plan", str(manifest_path)])
        assert result.exit_code == 1
        assert "Invalid log level" in result.output


# ---------------------------------------------------------------------------
# azredis observe
# ---------------------------------------------------------------------------


class TestObserveCommand:
    def test_json_output(self, tmp_path: Path) -> None:
        observed = _write_observed(tmp_path)
        result = CliRunner().invoke(cli, ["observe", str(observed), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["hostName"] == "example.redis.cache.windows.net"
        assert data["sslPort"] == 6380
        assert data["redisVersion"] == ""
        assert data["linkedServers"] == []

    def test_human_output(self, tmp_path: Path) -> None:
        observed = _write_observed(tmp_path)
        result = CliRunner().invoke(cli, ["observe", str(observed)])
        assert result.exit_code == 0, result.output
        assert "Observation" in result.output
        assert "provisioningState" in result.output
        assert '"Succeeded"' in result.output
