from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from .utils.primitives import asPrimitive

if TYPE_CHECKING:
	from .http.model import HTTPResponse


@dataclass(slots=True, frozen=True)
class JSONPayload:
	"""A value waiting to be written as the JSON body of a response,
	with an optional JSONP callback name.

	The value is converted to primitives when the payload is created, so
	later changes to the original value are not reflected. The callback
	is used verbatim, it is up to the caller to make sure it is a valid
	JavaScript identifier."""

	value: Any
	callback: str | None = None

	@staticmethod
	def Make(value: Any, callback: str | None = None) -> "JSONPayload":
		return JSONPayload(asPrimitive(value), callback)

	@staticmethod
	def JSON(value: Any) -> "JSONPayload":
		return JSONPayload.Make(value)

	@staticmethod
	def JSONP(value: Any, callback: str) -> "JSONPayload":
		return JSONPayload.Make(value, callback)

	@property
	def isJSONP(self) -> bool:
		return self.callback is not None

	def attach(self, response: "HTTPResponse") -> "HTTPResponse":
		"""Attaches this payload to the response, replacing any payload
		previously attached."""
		return response.attach(self)


def json(value: Any) -> JSONPayload:
	"""Creates a payload that will be rendered as plain JSON."""
	return JSONPayload.JSON(value)


def jsonp(value: Any, callback: str) -> JSONPayload:
	"""Creates a payload that will be rendered as `callback(JSON)`."""
	return JSONPayload.JSONP(value, callback)


# EOF
