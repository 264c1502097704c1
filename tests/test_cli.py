"""Tests for the elfscope command-line interface."""

import json

import pytest
from click.testing import CliRunner

from elfscope.cli import elfscope_cli

WIDE = {"COLUMNS": "300"}


@pytest.fixture
def runner():
    return CliRunner()


class TestConsoleOutput:
    """Default rendering of a decoded file."""

    def test_renders_all_tables(self, runner, sample_path):
        result = runner.invoke(elfscope_cli, [str(sample_path)], env=WIDE)
        assert result.exit_code == 0, result.output
        assert "ELF Header" in result.output
        assert "Program Headers" in result.output
        assert "Section Headers" in result.output
        assert "Symbol table '.symtab' contains 3 entries" in result.output
        assert "main" in result.output
        assert "counter" in result.output

    def test_no_symbols(self, runner, sample_path):
        result = runner.invoke(elfscope_cli, [str(sample_path), "--no-symbols"], env=WIDE)
        assert result.exit_code == 0, result.output
        assert "Section Headers" in result.output
        assert "Symbol table" not in result.output

    def test_single_section(self, runner, sample_path):
        result = runner.invoke(
            elfscope_cli, [str(sample_path), "--section", ".symtab"], env=WIDE
        )
        assert result.exit_code == 0, result.output
        assert "Symbol table '.symtab' contains 3 entries" in result.output

    def test_unknown_section_warns(self, runner, sample_path):
        result = runner.invoke(
            elfscope_cli, [str(sample_path), "-s", ".nothing"], env=WIDE
        )
        assert result.exit_code == 0, result.output
        assert "No section named .nothing" in result.output


class TestJsonOutput:
    """--json and --output."""

    def test_json_to_stdout(self, runner, sample_path):
        result = runner.invoke(elfscope_cli, [str(sample_path), "--json"], env=WIDE)
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["source"] == str(sample_path)
        assert data["header"]["machine_name"] == "Advanced Micro Devices X86-64"
        assert [s["name"] for s in data["sections"]][1:4] == [".text", ".data", ".bss"]
        symbols = data["symbol_tables"][0]["symbols"]
        assert [s["name"] for s in symbols] == ["", "main", "counter"]

    def test_json_without_symbols(self, runner, sample_path):
        result = runner.invoke(
            elfscope_cli, [str(sample_path), "--json", "--no-symbols"], env=WIDE
        )
        assert result.exit_code == 0, result.output
        assert "symbol_tables" not in json.loads(result.output)

    def test_report_file(self, runner, sample_path, tmp_path):
        out = tmp_path / "reports" / "sample.json"
        result = runner.invoke(
            elfscope_cli, [str(sample_path), "--output", str(out)], env=WIDE
        )
        assert result.exit_code == 0, result.output
        assert "JSON report saved" in result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert len(data["sections"]) == 7


class TestFailures:
    """Decode errors exit non-zero with the failing phase."""

    def test_not_an_elf_file(self, runner, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_bytes(b"just some text, definitely not ELF\n")
        result = runner.invoke(elfscope_cli, [str(path)], env=WIDE)
        assert result.exit_code == 1
        assert "Failed to decode" in result.output
        assert "validate_ident" in result.output

    def test_truncated_file(self, runner, tmp_path, sample_image):
        path = tmp_path / "short.elf"
        path.write_bytes(sample_image[:30])
        result = runner.invoke(elfscope_cli, [str(path)], env=WIDE)
        assert result.exit_code == 1
        assert "decode_header" in result.output

    def test_missing_file_is_a_usage_error(self, runner, tmp_path):
        result = runner.invoke(elfscope_cli, [str(tmp_path / "absent")], env=WIDE)
        assert result.exit_code == 2


class TestConfigFile:
    """--config drives the display settings."""

    def test_display_settings_from_config(self, runner, sample_path, tmp_path):
        cfg = tmp_path / "elfscope.toml"
        cfg.write_text(
            "[display]\nshow_segments = false\nshow_symbols = false\n",
            encoding="utf-8",
        )
        result = runner.invoke(
            elfscope_cli, [str(sample_path), "--config", str(cfg)], env=WIDE
        )
        assert result.exit_code == 0, result.output
        assert "Program Headers" not in result.output
        assert "Symbol table" not in result.output
        assert "Section Headers" in result.output

    def test_flag_overrides_config(self, runner, sample_path, tmp_path):
        cfg = tmp_path / "elfscope.toml"
        cfg.write_text("[display]\nshow_symbols = false\n", encoding="utf-8")
        result = runner.invoke(
            elfscope_cli,
            [str(sample_path), "-c", str(cfg), "--symbols"],
            env=WIDE,
        )
        assert result.exit_code == 0, result.output
        assert "Symbol table '.symtab'" in result.output

    def test_log_file_from_config(self, runner, sample_path, tmp_path):
        log_path = tmp_path / "logs" / "elfscope.log"
        cfg = tmp_path / "elfscope.toml"
        cfg.write_text(
            f'[global]\nlog_level = "DEBUG"\nlog_file = "{log_path.as_posix()}"\n'
            "log_json = true\n",
            encoding="utf-8",
        )
        result = runner.invoke(
            elfscope_cli, [str(sample_path), "-c", str(cfg), "--json"], env=WIDE
        )
        assert result.exit_code == 0, result.output
        json.loads(result.output)

        records = [json.loads(line) for line in log_path.read_text("utf-8").splitlines()]
        phases = {r.get("phase") for r in records}
        assert "decode_header" in phases
        assert any(r["message"].startswith("Loaded ELF") for r in records)

    @pytest.mark.parametrize("body", [
        "[decoder]\nread_chunk_size = 0\n",
        "[decoder\n",
    ])
    def test_invalid_config_exits_cleanly(self, runner, sample_path, tmp_path, body):
        cfg = tmp_path / "elfscope.toml"
        cfg.write_text(body, encoding="utf-8")
        result = runner.invoke(
            elfscope_cli, [str(sample_path), "-c", str(cfg)], env=WIDE
        )
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert not isinstance(result.exception, ValueError)
