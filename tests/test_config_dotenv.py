from __future__ import annotations

import os
from io import StringIO
from pathlib import Path
from typing import Iterator

import pytest
from click.testing import CliRunner

from lib_pmem_output import cli as cli_module
from lib_pmem_output import config as output_config
from lib_pmem_output import runtime
from lib_pmem_output.runtime import RuntimeConfig


@pytest.fixture(autouse=True)
def _reset_dotenv_state() -> Iterator[None]:
    """Reset shared dotenv state around each test."""

    output_config._reset_dotenv_state_for_testing()
    yield
    output_config._reset_dotenv_state_for_testing()


def test_enable_dotenv_populates_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Loading the nearest .env injects values without overriding call arguments."""

    nested = tmp_path / "nested"
    nested.mkdir()
    env_file = tmp_path / ".env"
    env_file.write_text("PMEM_OUTPUT_PREFIX=dotenv-tool\n")
    monkeypatch.chdir(nested)
    monkeypatch.delenv("PMEM_OUTPUT_PREFIX", raising=False)

    loaded = output_config.enable_dotenv()

    assert loaded == env_file.resolve()
    assert os.environ["PMEM_OUTPUT_PREFIX"] == "dotenv-tool"

    os.environ.pop("PMEM_OUTPUT_PREFIX", None)


def test_enable_dotenv_respects_existing_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Existing environment variables keep precedence over .env entries."""

    nested = tmp_path / "nested"
    nested.mkdir()
    (tmp_path / ".env").write_text("PMEM_OUTPUT_PREFIX=dotenv-tool\n")
    monkeypatch.chdir(nested)
    monkeypatch.setenv("PMEM_OUTPUT_PREFIX", "real-tool")

    result = output_config.enable_dotenv()

    assert result is not None
    assert os.environ["PMEM_OUTPUT_PREFIX"] == "real-tool"


def test_enable_dotenv_returns_none_without_file(tmp_path: Path) -> None:
    empty = tmp_path / "a" / "b"
    empty.mkdir(parents=True)
    if any((parent / ".env").is_file() for parent in (empty, *empty.parents)):
        pytest.skip("a .env exists above the temporary directory")
    assert output_config.enable_dotenv(search_from=empty) is None


@pytest.mark.parametrize(
    "explicit, env_value, expected",
    [
        (None, None, False),
        (None, "1", True),
        (None, "off", False),
        (None, "maybe", False),
        (True, None, True),
        (False, "yes", False),
    ],
)
def test_should_use_dotenv(explicit: bool | None, env_value: str | None, expected: bool) -> None:
    assert output_config.should_use_dotenv(explicit=explicit, env_value=env_value) is expected


def test_cli_dotenv_toggle_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    """CLI flag wins over environment toggle when deciding whether to load .env."""

    runner = CliRunner()

    calls: list[tuple[tuple[object, ...], dict[str, object]]] = []

    def record_enable(*args: object, **kwargs: object) -> None:
        calls.append((args, kwargs))

    monkeypatch.setattr(output_config, "enable_dotenv", record_enable)

    result = runner.invoke(cli_module.cli, ["--use-dotenv", "info"])
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    env = {output_config.DOTENV_ENV_VAR: "1"}
    result = runner.invoke(cli_module.cli, ["info"], env=env)
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    result = runner.invoke(cli_module.cli, ["--no-use-dotenv", "info"], env=env)
    assert result.exit_code == 0
    assert calls == []


def test_dotenv_values_configure_the_shared_printer(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Verbosity and prefix loaded from .env gate and label runtime output."""

    (tmp_path / ".env").write_text("PMEM_OUTPUT_VERBOSITY=2\nPMEM_OUTPUT_PREFIX=pmempool\n")
    monkeypatch.chdir(tmp_path)
    buffer = StringIO()
    try:
        output_config.enable_dotenv()
        runtime.init(RuntimeConfig(verbosity=0, stream=buffer))
        runtime.print_at(2, "pool set\n")
        runtime.print_at(3, "too detailed\n")
    finally:
        os.environ.pop("PMEM_OUTPUT_VERBOSITY", None)
        os.environ.pop("PMEM_OUTPUT_PREFIX", None)

    assert buffer.getvalue() == "pmempool: pool set\n"
    assert runtime.inspect_runtime().verbosity == 2


def test_cli_dotenv_verbosity_silences_value_commands(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """A .env verbosity of zero overrides the CLI default so gated values vanish."""

    (tmp_path / ".env").write_text("PMEM_OUTPUT_VERBOSITY=0\n")
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    try:
        quiet = runner.invoke(cli_module.cli, ["--use-dotenv", "size", "1536"])
    finally:
        os.environ.pop("PMEM_OUTPUT_VERBOSITY", None)
    output_config._reset_dotenv_state_for_testing()
    loud = runner.invoke(cli_module.cli, ["--no-use-dotenv", "size", "1536"])

    assert quiet.exit_code == 0
    assert quiet.output == ""
    assert loud.exit_code == 0
    assert loud.output == "1.5K\n"
