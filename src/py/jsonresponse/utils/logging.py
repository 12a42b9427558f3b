import sys
import time
from enum import Enum
from typing import NamedTuple, Any
from contextvars import ContextVar
from .primitives import TPrimitive
from .term import Term
from .. import config

ERR = sys.stderr


LogOrigin: ContextVar[str] = ContextVar("LogOrigin", default="jsonresponse")


class LogLevel(Enum):
	Debug = 0
	Info = 10
	Warning = 30  # A managed anomaly, processing goes on
	Error = 40  # A managed error


LOG_LEVEL_COLOR = {
	LogLevel.Debug: 31,
	LogLevel.Info: 75,
	LogLevel.Warning: 202,
	LogLevel.Error: 160,
}

LOG_LEVELS: dict[str, LogLevel] = {_.name.lower(): _ for _ in LogLevel}


class LogEntry(NamedTuple):
	origin: str
	time: float
	level: LogLevel = LogLevel.Info
	message: str | None = None
	value: TPrimitive | None = None
	context: dict[str, TPrimitive] | None = None


def formatData(value: Any) -> str:
	if value is None or value == () or value == [] or value == {}:
		return "◌"
	elif isinstance(value, dict):
		return " ".join(
			f"{Term.BOLD}{k}{Term.RESET}={formatData(v)}" for k, v in value.items()
		)
	elif isinstance(value, list) or isinstance(value, tuple):
		return ",".join(formatData(v) for v in value)
	elif isinstance(value, str):
		return repr(value) if " " in value else value
	elif isinstance(value, bool):
		return "✓" if value else "✗"
	elif isinstance(value, float):
		return f"{value:0.2f}"
	else:
		return str(value)


def logged(level: LogLevel) -> bool:
	"""Tells if entries at the given level are currently output. This is used
	to guard against building entries when not necessary."""
	threshold: LogLevel = LOG_LEVELS.get(config.LOG_LEVEL, LogLevel.Info)
	return level.value >= threshold.value


def send(entry: LogEntry) -> LogEntry:
	if not logged(entry.level):
		return entry
	clr: str = Term.Color(LOG_LEVEL_COLOR[entry.level])
	code: str = f" [{entry.value}]" if entry.value is not None else ""
	ERR.write(
		f"{clr}{Term.BOLD}[{entry.origin}]{Term.RESET}{code} {entry.message} {formatData(entry.context)}{Term.RESET}\n"
	)
	ERR.flush()
	return entry


def entry(
	*,
	origin: str | None = None,
	level: LogLevel = LogLevel.Info,
	message: str | None = None,
	value: TPrimitive | None = None,
	context: dict[str, TPrimitive],
) -> LogEntry:
	return LogEntry(
		origin=origin or LogOrigin.get(),
		time=time.time(),
		level=level,
		message=message,
		value=value,
		context=context,
	)


def debug(
	message: str,
	*,
	origin: str | None = None,
	**context: TPrimitive,
) -> LogEntry:
	return send(
		entry(
			message=message,
			level=LogLevel.Debug,
			origin=origin,
			context=context,
		)
	)


def info(
	message: str,
	*,
	origin: str | None = None,
	**context: TPrimitive,
) -> LogEntry:
	return send(entry(message=message, origin=origin, context=context))


def warning(
	message: str,
	*,
	origin: str | None = None,
	**context: TPrimitive,
) -> LogEntry:
	return send(
		entry(
			message=message,
			level=LogLevel.Warning,
			origin=origin,
			context=context,
		)
	)


def error(
	message: str,
	code: int | str | None,
	*,
	origin: str | None = None,
	**context: TPrimitive,
) -> LogEntry:
	return send(
		entry(
			message=message,
			value=code,
			level=LogLevel.Error,
			origin=origin,
			context=context,
		)
	)


# EOF
