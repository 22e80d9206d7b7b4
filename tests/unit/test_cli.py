import json
from types import SimpleNamespace

from typer.testing import CliRunner

from statusboard.cli import _print_services, cli_app, console
from statusboard.services.telemetry.models import INITIAL_SERVICES, EngineMode

runner = CliRunner()


def test_normalize_command():
    result = runner.invoke(cli_app, ["normalize", "healthy"])
    assert result.exit_code == 0
    assert "OPERATIONAL" in result.output


def test_normalize_offline_token():
    result = runner.invoke(cli_app, ["normalize", "Service DOWN"])
    assert result.exit_code == 0
    assert "OFFLINE" in result.output


def test_snapshot_in_simulation_mode(tmp_path):
    result = runner.invoke(cli_app, ["snapshot", "--config", str(tmp_path / "missing.json")])
    assert result.exit_code == 0
    assert "SIMULATION_MODE" in result.output
    assert "CORE_GATEWAY" in result.output
    assert "ACTIVATING SIMULATION PROTOCOL" in result.output


def test_snapshot_chinese_log(tmp_path):
    result = runner.invoke(cli_app, ["snapshot", "--config", str(tmp_path / "missing.json"), "--lang", "zh"])
    assert result.exit_code == 0
    assert "正在激活模拟协议" in result.output


def test_snapshot_with_unreachable_backend(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"apiBase": "http://127.0.0.1:9/api", "readKey": "K1"}))

    result = runner.invoke(cli_app, ["snapshot", "--config", str(path)])

    assert result.exit_code == 0
    assert "API_MODE" in result.output
    assert "API CONNECTION ERROR" in result.output


def test_offline_latency_renders_as_ascii_placeholder():
    engine = SimpleNamespace(mode=EngineMode.SIMULATION_MODE, services=INITIAL_SERVICES)

    with console.capture() as capture:
        _print_services(engine)
    output = capture.get()

    assert "---" in output
    assert "24 ms" in output
    assert "\u2014" not in output
