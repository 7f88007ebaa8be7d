"""Tests for the Catchfall logging module."""

import json

import pytest

from catchfall import logging as cf_logging
from catchfall.logging import (
    FileSink,
    LogLevel,
    NullSink,
    close_all_sinks,
    configure_logging,
    create_sink,
    emit_record,
    get_logger,
    parse_level,
    register_sink,
)


@pytest.fixture
def restore_logging():
    """Snapshot the global logging config and restore it afterwards."""
    saved_default = cf_logging._config['default_level']
    saved_modules = dict(cf_logging._config['module_levels'])
    saved_records = set(cf_logging._config['records'])
    yield
    close_all_sinks()
    cf_logging._config['default_level'] = saved_default
    cf_logging._config['module_levels'] = saved_modules
    cf_logging._config['records'] = saved_records


class TestLogger:
    """Tests for CatchfallLogger."""

    def test_loggers_are_cached(self):
        assert get_logger('engine') is get_logger('engine')

    def test_output_format(self, capsys, restore_logging):
        """Messages are printed as '[module] LEVEL: message'."""
        configure_logging(level='DEBUG')
        get_logger('test_format').info("caught %s", 'friend')

        assert capsys.readouterr().out.strip() == "[test_format] INFO: caught friend"

    def test_level_filtering(self, capsys, restore_logging):
        """Messages below the module level are dropped."""
        configure_logging(level='WARNING')
        log = get_logger('test_filter')
        log.info("hidden")
        log.warning("shown")

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "[test_filter] WARN: shown" in out

    def test_module_level_overrides_default(self, capsys, restore_logging):
        configure_logging(level='ERROR', modules={'test_module': 'TRACE'})
        get_logger('test_module').trace("very verbose")

        assert "very verbose" in capsys.readouterr().out
        assert get_logger('test_module').level == LogLevel.TRACE

    def test_bad_format_args_do_not_raise(self, capsys, restore_logging):
        configure_logging(level='INFO')
        get_logger('test_args').info("%d items", "not a number")
        assert "items" in capsys.readouterr().out


class TestSinks:
    """Tests for structured record sinks."""

    def test_emit_without_sink(self, restore_logging):
        """emit_record reports False when no sink is registered."""
        assert emit_record('nowhere', {'a': 1}) is False

    def test_null_sink_accepts_records(self, restore_logging):
        register_sink('session', NullSink())
        assert emit_record('session', {'score': 10}) is True

    def test_file_sink_writes_jsonl(self, tmp_path, restore_logging):
        """FileSink writes a header, the records and a footer."""
        sink = FileSink(log_dir=str(tmp_path), run_name='run')
        register_sink('session', sink)

        emit_record('session', {'event': 'session_end', 'final_score': 40})
        path = sink.log_paths['session']
        close_all_sinks()

        lines = [json.loads(line) for line in path.read_text().splitlines()]
        assert lines[0]['type'] == 'header'
        assert lines[1]['final_score'] == 40
        assert 'wall_time' in lines[1]
        assert lines[-1]['type'] == 'footer'

    def test_create_sink_is_opt_in(self, restore_logging):
        """Modules get a NullSink unless structured logging is enabled."""
        assert isinstance(create_sink('session'), NullSink)

        configure_logging(records={'session'})
        assert isinstance(create_sink('session'), FileSink)

    def test_register_replaces_and_closes_previous(self, tmp_path, restore_logging):
        first = FileSink(log_dir=str(tmp_path), run_name='first')
        register_sink('session', first)
        emit_record('session', {'n': 1})
        register_sink('session', NullSink())

        lines = first.path_for('session').read_text().splitlines()
        assert json.loads(lines[-1])['type'] == 'footer'


def test_parse_level():
    assert parse_level('debug') == LogLevel.DEBUG
    assert parse_level('WARN') == LogLevel.WARNING
    assert parse_level('nonsense') == LogLevel.INFO
