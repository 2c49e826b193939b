from typer.testing import CliRunner

from cfail.cli.main import app

runner = CliRunner()


def test_cli_help_smoke() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "check" in result.stdout
    assert "run" in result.stdout


def test_cli_run_help_lists_options() -> None:
    result = runner.invoke(app, ["run", "--help"])
    assert result.exit_code == 0
    for option in ("--config", "--extension", "--quiet", "--log-level"):
        assert option in result.stdout
