"""
Catchfall logging.

Two channels:

- Console: get_logger(module) returns a cached CatchfallLogger that prints
  "[module] LEVEL: message" lines. The effective level is looked up on every
  call, so configure_logging() also affects loggers created at import time.
- Records: emit_record(module, record) hands a JSON-serialisable dict to the
  sink registered for that module. Games emit one record per finished
  session; FileSink appends them to a JSONL file.

Usage:
    from catchfall.logging import get_logger, emit_record

    log = get_logger('session')
    log.info("Session %d started", 3)
    emit_record('session', {'event': 'session_end', 'final_score': 120})

Environment:
    CATCHFALL_LOG_LEVEL=DEBUG          default console level
    CATCHFALL_LOG_ENGINE=TRACE         level for one module
    CATCHFALL_LOG_DIR=/tmp/catchfall   where FileSink writes
    CATCHFALL_RECORDS=session          modules whose records go to disk
"""

import json
import os
import time
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Set, TextIO


class LogLevel(IntEnum):
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    OFF = 100


# Short names used in the console prefix
_LABELS = {
    LogLevel.TRACE: 'TRACE',
    LogLevel.DEBUG: 'DEBUG',
    LogLevel.INFO: 'INFO',
    LogLevel.WARNING: 'WARN',
    LogLevel.ERROR: 'ERROR',
}

_ALIASES = {'WARN': LogLevel.WARNING, 'CRITICAL': LogLevel.ERROR}

_ENV_PREFIX = 'CATCHFALL_LOG_'

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},
    'log_dir': None,
    'records': set(),
}


def parse_level(name: str) -> LogLevel:
    """Level for a name like 'debug' or 'WARN'; unknown names give INFO."""
    key = name.strip().upper()
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return LogLevel[key]
    except KeyError:
        return LogLevel.INFO


def _module_key(module: str) -> str:
    return module.lower().replace('.', '_')


def configure_logging(
    level: Optional[str] = None,
    modules: Optional[Dict[str, str]] = None,
    log_dir: Optional[str] = None,
    records: Optional[Set[str]] = None,
) -> None:
    """
    Change logging settings at runtime.

    Args:
        level: Default console level
        modules: module name -> level, overriding the default
        log_dir: Directory FileSink writes to
        records: Module names whose structured records are written to disk
    """
    if level is not None:
        _config['default_level'] = parse_level(level)
    for module, module_level in (modules or {}).items():
        _config['module_levels'][_module_key(module)] = parse_level(module_level)
    if log_dir is not None:
        _config['log_dir'] = log_dir
    if records is not None:
        _config['records'] = {_module_key(m) for m in records}


def disable_logging() -> None:
    """Silence console output (records are unaffected)."""
    _config['default_level'] = LogLevel.OFF
    _config['module_levels'].clear()


def _load_env() -> None:
    env = os.environ
    if 'CATCHFALL_LOG_LEVEL' in env:
        _config['default_level'] = parse_level(env['CATCHFALL_LOG_LEVEL'])
    if 'CATCHFALL_LOG_DIR' in env:
        _config['log_dir'] = env['CATCHFALL_LOG_DIR']
    if 'CATCHFALL_RECORDS' in env:
        _config['records'] = {_module_key(m) for m in env['CATCHFALL_RECORDS'].split(',') if m.strip()}

    for key, value in env.items():
        if key.startswith(_ENV_PREFIX) and key not in ('CATCHFALL_LOG_LEVEL', 'CATCHFALL_LOG_DIR'):
            _config['module_levels'][_module_key(key[len(_ENV_PREFIX):])] = parse_level(value)


_load_env()


# =============================================================================
# Console loggers
# =============================================================================

class CatchfallLogger:
    """Console logger for one module."""

    def __init__(self, module: str):
        self.module = module
        self._key = _module_key(module)

    @property
    def level(self) -> LogLevel:
        return _config['module_levels'].get(self._key, _config['default_level'])

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(self, level: LogLevel, msg: str, args: tuple) -> None:
        if level < self.level:
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                # Never let a bad format string take down a frame
                msg = f"{msg} {args}"
        print(f"[{self.module}] {_LABELS[level]}: {msg}")

    def trace(self, msg: str, *args) -> None:
        self._log(LogLevel.TRACE, msg, args)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, msg, args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, msg, args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, msg, args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, msg, args)


@lru_cache(maxsize=64)
def get_logger(module: str) -> CatchfallLogger:
    """Cached logger for a module name ('engine', 'session', ...)."""
    return CatchfallLogger(module)


# =============================================================================
# Structured records
# =============================================================================

def get_log_dir() -> Path:
    """Configured log directory, else $XDG_DATA_HOME/catchfall/logs."""
    if _config['log_dir']:
        return Path(_config['log_dir']).expanduser()
    data_home = os.environ.get('XDG_DATA_HOME') or str(Path.home() / '.local' / 'share')
    return Path(data_home) / 'catchfall' / 'logs'


class LogSink(ABC):
    """Destination for structured records."""

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def close(self) -> None:
        pass


class NullSink(LogSink):
    """Discards every record."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass


class FileSink(LogSink):
    """
    Appends records to one JSONL file per module.

    Files are named "<run>_<module>.jsonl" and opened on first use. Each file
    starts with a header line and gets a footer line when the sink closes.
    Every record is stamped with wall_time unless it already has one.

    Args:
        log_dir: Target directory (default: get_log_dir())
        run_name: File name prefix (default: start timestamp)
    """

    def __init__(self, log_dir: Optional[str] = None, run_name: Optional[str] = None):
        self._log_dir = Path(log_dir) if log_dir else get_log_dir()
        self._run_name = run_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, TextIO] = {}

    def path_for(self, module: str) -> Path:
        return self._log_dir / f"{self._run_name}_{module}.jsonl"

    @property
    def log_paths(self) -> Dict[str, Path]:
        """Paths of the files opened so far, by module."""
        return {module: self.path_for(module) for module in self._files}

    def _open(self, module: str) -> TextIO:
        handle = self._files.get(module)
        if handle is None:
            self._log_dir.mkdir(parents=True, exist_ok=True)
            handle = self.path_for(module).open('a')
            self._files[module] = handle
            self._write(handle, {'type': 'header', 'module': module, 'run': self._run_name,
                                 'start_time': time.time()})
        return handle

    @staticmethod
    def _write(handle: TextIO, record: Dict[str, Any]) -> None:
        handle.write(json.dumps(record) + "\n")
        handle.flush()

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        record.setdefault('wall_time', time.time())
        self._write(self._open(module), record)

    def close(self) -> None:
        for module, handle in self._files.items():
            self._write(handle, {'type': 'footer', 'module': module, 'end_time': time.time()})
            handle.close()
        self._files.clear()


_sinks: Dict[str, LogSink] = {}


def register_sink(module: str, sink: LogSink) -> None:
    """Route records for a module to a sink, replacing any previous one."""
    previous = _sinks.get(module)
    if previous is not None and previous is not sink:
        previous.close()
    _sinks[module] = sink


def create_sink(module: str, run_name: Optional[str] = None) -> LogSink:
    """FileSink if the module's records are enabled, else NullSink."""
    if _module_key(module) in _config['records']:
        return FileSink(run_name=run_name)
    return NullSink()


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Send a record to the module's sink.

    Returns:
        False if no sink is registered for the module
    """
    sink = _sinks.get(module)
    if sink is None:
        return False
    sink.emit(module, dict(record))
    return True


def close_all_sinks() -> None:
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()
