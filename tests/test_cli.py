"""CLI behaviour coverage matching the rich-click adapter."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner

from lib_pmem_output import __init__conf__, summary_info
from lib_pmem_output import cli as cli_mod


def run_cli(args: list[str]) -> tuple[int, str, BaseException | None]:
    """Invoke the rich-click command with ``CliRunner`` and capture output."""

    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, args, prog_name=__init__conf__.shell_command)
    return result.exit_code, result.output, result.exception


@pytest.fixture
def pool_file(tmp_path: Path) -> Path:
    path = tmp_path / "pool.bin"
    path.write_bytes(b"PMEMPOOL" + bytes(8) + b"\xff" * 48 + b"tail")
    return path


def test_cli_without_subcommand_prints_summary() -> None:
    exit_code, stdout, _ = run_cli([])

    assert exit_code == 0
    assert stdout == summary_info()


def test_cli_info_command_matches_summary() -> None:
    exit_code, stdout, _ = run_cli(["info"])

    assert exit_code == 0
    assert stdout == summary_info()


def test_cli_version_option() -> None:
    exit_code, stdout, _ = run_cli(["--version"])

    assert exit_code == 0
    assert __init__conf__.version in stdout


def test_cli_hexdump_renders_file(pool_file: Path) -> None:
    exit_code, stdout, _ = run_cli(["hexdump", str(pool_file)])

    lines = stdout.splitlines()
    assert exit_code == 0
    assert lines[0] == "00000000  50 4d 45 4d 50 4f 4f 4c  00 00 00 00 00 00 00 00 |PMEMPOOL........|"
    assert lines[1].startswith("00000010  ff ff")
    assert lines[2] == "*"
    assert lines[3].startswith("00000040  74 61 69 6c")
    assert len(lines) == 4


def test_cli_hexdump_region_with_separator_and_prefix_free_rows(pool_file: Path) -> None:
    exit_code, stdout, _ = run_cli(["--prefix", "pmempool", "hexdump", str(pool_file), "--offset", "0x40", "--sep"])

    lines = stdout.splitlines()
    assert exit_code == 0
    assert lines[0].startswith("00000040  74 61 69 6c")
    assert lines[1] == "-" * (len(lines[0]))


def test_cli_hexdump_details_need_extra_verbosity(pool_file: Path) -> None:
    _, quiet_out, _ = run_cli(["hexdump", str(pool_file), "--length", "4"])
    _, verbose_out, _ = run_cli(["-v", "--prefix", "pmempool", "hexdump", str(pool_file), "--length", "4"])

    assert "Length" not in quiet_out
    assert "pmempool: Length               : 4\n" in verbose_out
    assert "00000000  50 4d 45 4d" in verbose_out


def test_cli_quiet_suppresses_gated_output(pool_file: Path) -> None:
    exit_code, stdout, _ = run_cli(["--quiet", "hexdump", str(pool_file)])

    assert exit_code == 0
    assert stdout == ""


def test_cli_hexdump_past_end_reports_error(pool_file: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, ["hexdump", str(pool_file), "--offset", "4096"])

    assert result.exit_code == 1
    assert "error: nothing to dump at offset 0x1000" in result.output


def test_cli_checksum_command(tmp_path: Path) -> None:
    path = tmp_path / "hdr.bin"
    path.write_bytes(b"\x01\x00\x00\x00" + bytes(12))

    exit_code, stdout, _ = run_cli(["checksum", str(path), "--csum-offset", "8"])

    assert exit_code == 0
    assert stdout == "Checksum" + " " * 12 + " : 0x00000000 [wrong! should be: 0x00000001]\n"
    assert path.read_bytes() == b"\x01\x00\x00\x00" + bytes(12)


@pytest.mark.parametrize(
    "args, expected",
    [
        (["size", "1536"], "1.5K\n"),
        (["size", "1536", "--mode", "both"], "1.5K [1536]\n"),
        (["size", "0x400", "--mode", "bytes"], "1024\n"),
        (["percent", "42.5"], "42.500000 %\n"),
        (["btt-map", "0x40001234"], "0x00001234 state: error\n"),
        (["btt-map", "0x140001234"], "0x00001234 state: error\n"),
        (["pool-type", "4"], "obj\n"),
        (["pool-type", "9"], "unknown\n"),
        (["uuid", "0123456789ABCDEF0123456789ABCDEF"], "01234567-89ab-cdef-0123-456789abcdef\n"),
    ],
)
def test_cli_value_commands(args: list[str], expected: str) -> None:
    exit_code, stdout, _ = run_cli(args)

    assert exit_code == 0
    assert stdout == expected


def test_cli_prefix_applies_to_value_commands() -> None:
    exit_code, stdout, _ = run_cli(["--prefix", "tool", "percent", "0"])

    assert exit_code == 0
    assert stdout == "tool: 0 %\n"


def test_cli_rejects_bad_values() -> None:
    assert run_cli(["size", "lots"])[0] != 0
    assert run_cli(["uuid", "not-a-uuid"])[0] != 0
    assert run_cli(["--column-width", "-1", "info"])[0] != 0


def test_cli_traceback_option_sets_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", False, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", False, raising=False)

    exit_code, _stdout, _exception = run_cli(["--traceback", "info"])

    assert exit_code == 0
    assert lib_cli_exit_tools.config.traceback is True
    assert lib_cli_exit_tools.config.traceback_force_color is True


def test_main_restores_traceback_preferences(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", False, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", False, raising=False)

    recorded: dict[str, bool] = {}

    def fake_run_cli(command: Callable[..., int], argv: list[str] | None = None, *, prog_name: str | None = None, **_: object) -> int:
        runner = CliRunner()
        result = runner.invoke(command, ["info"] if argv is None else argv)
        if result.exception is not None:
            raise result.exception
        recorded["traceback"] = lib_cli_exit_tools.config.traceback
        return result.exit_code

    monkeypatch.setattr(lib_cli_exit_tools, "run_cli", fake_run_cli)

    exit_code = cli_mod.main(["--traceback", "info"])

    assert exit_code == 0
    assert recorded == {"traceback": True}
    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


def test_main_consumes_sys_argv(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(sys, "argv", [__init__conf__.shell_command, "percent", "100"], raising=False)

    exit_code = cli_mod.main()
    captured = capsys.readouterr()

    assert exit_code == 0
    assert captured.out == "100 %\n"
