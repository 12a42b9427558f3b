from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar
import json as basejson

import orjson

from . import config

# -----------------------------------------------------------------------------
#
# ERRORS
#
# -----------------------------------------------------------------------------


class SerializationError(Exception):
	"""Raised by a serializer when the value can't be converted to JSON."""

	def __init__(self, message: str, cause: Exception | None = None):
		super().__init__(message)
		self.message: str = message
		self.cause: Exception | None = cause


# -----------------------------------------------------------------------------
#
# SERIALIZERS
#
# -----------------------------------------------------------------------------


class Serializer(ABC):
	"""Converts primitive values (as produced by `asPrimitive`) to JSON
	text."""

	name: ClassVar[str] = "abstract"

	@abstractmethod
	def serialize(self, value: Any) -> str:
		...

	def __repr__(self) -> str:
		return f"(Serializer {self.name})"


class JSONSerializer(Serializer):
	"""Uses the standard library `json` module. The output is compact and
	strictly JSON, so `NaN` and infinities are rejected."""

	name: ClassVar[str] = "json"

	def serialize(self, value: Any) -> str:
		try:
			return basejson.dumps(
				value, separators=(",", ":"), ensure_ascii=False, allow_nan=False
			)
		# NOTE: `TypeError` for unsupported types, `ValueError` for circular
		# references and non-finite floats, `RecursionError` for deep values.
		except (TypeError, ValueError, RecursionError) as e:
			raise SerializationError(f"Value is not JSON serializable: {e}", e) from e


class ORJSONSerializer(Serializer):
	"""Uses `orjson`, which is faster. Non-string keys are accepted to
	match the standard library behaviour."""

	name: ClassVar[str] = "orjson"

	def serialize(self, value: Any) -> str:
		try:
			return orjson.dumps(value, option=orjson.OPT_NON_STR_KEYS).decode(
				config.DEFAULT_ENCODING
			)
		except orjson.JSONEncodeError as e:
			raise SerializationError(f"Value is not JSON serializable: {e}", e) from e


class Serializers:
	"""Registry of the available serializer backends, by name."""

	All: ClassVar[dict[str, Callable[[], Serializer]]] = {
		JSONSerializer.name: JSONSerializer,
		ORJSONSerializer.name: ORJSONSerializer,
	}

	@classmethod
	def Register(cls, name: str, factory: Callable[[], Serializer]) -> None:
		cls.All[name.lower()] = factory

	@classmethod
	def Get(cls, name: str) -> Serializer:
		key: str = name.lower()
		if key not in cls.All:
			raise ValueError(
				f"Serializer '{name}' is not registered, pick one of: {', '.join(sorted(cls.All.keys()))}"
			)
		return cls.All[key]()


def serializer(name: str | None = None) -> Serializer:
	"""Returns the serializer with the given name, defaulting to the one
	set in `JSONRESPONSE_SERIALIZER`."""
	return Serializers.Get(name or config.JSON_SERIALIZER)


# EOF
