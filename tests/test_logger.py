"""Tests for the structured logger."""

import io
import json
import logging

import pytest

from elfscope import ElfFile, ElfLoader, LoadPhase, TruncatedInput
from elfscope.shared.logger import ScopeLogger


def _records(path):
    return [json.loads(line) for line in path.read_text("utf-8").splitlines()]


class TestScopeLogger:
    """Component and phase tagging."""

    def test_json_records_carry_component_and_phase(self, tmp_path):
        log_file = tmp_path / "scope.log"
        log = ScopeLogger(
            "unit", log_level="DEBUG", log_file=log_file, json_logs=True,
            console_output=False,
        )
        log.info("outside")
        with log.phase("decode_header"):
            log.debug("inside", offset=64)

        first, second = _records(log_file)
        assert first["component"] == "unit"
        assert first["logger"] == "elfscope.unit"
        assert "phase" not in first
        assert second["phase"] == "decode_header"
        assert second["extra"] == {"offset": 64}

    def test_phase_is_restored(self):
        log = ScopeLogger.quiet("unit")
        with log.phase("outer"):
            with log.phase("inner"):
                assert log.current_phase == "inner"
            assert log.current_phase == "outer"
        assert log.current_phase is None

    def test_plain_file_format(self, tmp_path):
        log_file = tmp_path / "plain.log"
        log = ScopeLogger("unit", log_file=log_file, console_output=False)
        with log.phase("ready"):
            log.warning("something odd")
        line = log_file.read_text("utf-8").strip()
        assert "WARNING" in line
        assert "| ready |" in line
        assert line.endswith("something odd")

    def test_level_filters(self, tmp_path):
        log_file = tmp_path / "scope.log"
        log = ScopeLogger(
            "unit", log_level="WARNING", log_file=log_file, json_logs=True,
            console_output=False,
        )
        log.info("dropped")
        log.error("kept")
        assert [r["message"] for r in _records(log_file)] == ["kept"]

    def test_quiet_adds_no_handlers(self):
        log = ScopeLogger.quiet("silent")
        assert log.underlying.handlers == []
        assert log.component == "silent"

    def test_quiet_keeps_existing_configuration(self, tmp_path):
        configured = ScopeLogger(
            "keep", log_level="DEBUG", log_file=tmp_path / "keep.log",
            console_output=False,
        )
        handlers = list(configured.underlying.handlers)

        quiet = ScopeLogger.quiet("keep")

        assert quiet.underlying is configured.underlying
        assert quiet.underlying.handlers == handlers
        assert quiet.underlying.level == logging.DEBUG

    def test_reconfiguring_closes_replaced_handlers(self, tmp_path):
        first = ScopeLogger("swap", log_file=tmp_path / "swap.log", console_output=False)
        (old_handler,) = first.underlying.handlers

        ScopeLogger("swap", log_file=tmp_path / "swap2.log", console_output=False)

        assert old_handler.stream is None
        assert old_handler not in first.underlying.handlers

    def test_reinstantiation_does_not_stack_handlers(self, tmp_path):
        log_file = tmp_path / "scope.log"
        ScopeLogger("dup", log_file=log_file, console_output=False)
        log = ScopeLogger("dup", log_file=log_file, console_output=False)
        assert len(log.underlying.handlers) == 1


class TestLoaderLogging:
    """What the loader writes while decoding."""

    def test_phases_are_logged(self, tmp_path, sample_stream):
        log_file = tmp_path / "loader.log"
        log = ScopeLogger(
            "loader", log_level="DEBUG", log_file=log_file, json_logs=True,
            console_output=False,
        )
        ElfLoader(logger=log).load(sample_stream)

        records = _records(log_file)
        entered = [
            r["phase"] for r in records if r["message"].startswith("Entering phase")
        ]
        assert entered == [p.value for p in LoadPhase]
        assert records[-1]["message"] == "Loaded ELF: 1 segments, 7 sections"

    def test_failure_is_logged_with_phase(self, tmp_path, sample_image):
        log_file = tmp_path / "loader.log"
        log = ScopeLogger(
            "loader", log_level="DEBUG", log_file=log_file, json_logs=True,
            console_output=False,
        )
        with pytest.raises(TruncatedInput):
            ElfLoader(logger=log).load(io.BytesIO(sample_image[:20]))

        records = _records(log_file)
        failed = [r for r in records if r["message"].startswith("Phase")]
        assert failed and failed[-1]["phase"] == "decode_header"
        assert not any(r["message"].startswith("Completed") for r in records)

    def test_default_load_keeps_caller_handlers(self, tmp_path, sample_image):
        log_file = tmp_path / "caller.log"
        log = ScopeLogger(
            "loader", log_level="DEBUG", log_file=log_file, json_logs=True,
            console_output=False,
        )
        handlers = list(log.underlying.handlers)

        ElfFile.open_stream(io.BytesIO(sample_image))
        ElfFile.open_stream(io.BytesIO(sample_image))

        assert log.underlying.handlers == handlers
        assert log.underlying.level == logging.DEBUG
        loaded = [r for r in _records(log_file) if r["message"].startswith("Loaded ELF")]
        assert len(loaded) == 2
