from typing import Any, Callable, NamedTuple, TypeVar

from ..config import DEFAULT_ENCODING
from ..payload import JSONPayload
from .api import ResponseFactory
from .status import HTTP_STATUS

T = TypeVar("T")

# -----------------------------------------------------------------------------
#
# HELPERS
#
# -----------------------------------------------------------------------------


def headername(name: str, *, headers: dict[str, str] = {}) -> str:
	"""Normalizes the header name as `Kebab-Case`."""
	if name in headers:
		return headers[name]
	key: str = name.lower()
	if key in headers:
		return headers[key]
	else:
		normalized: str = "-".join(_.capitalize() for _ in name.split("-"))
		headers[key] = normalized
		return normalized


# -----------------------------------------------------------------------------
#
# DATA MODEL
#
# -----------------------------------------------------------------------------


class HTTPHeaders(NamedTuple):
	"""Wraps HTTP headers, keeping key information for response/request processing."""

	headers: dict[str, str]
	contentType: str | None = None
	contentLength: int | None = None


class HTTPBodyBlob(NamedTuple):
	"""Represents a whole body as bytes."""

	payload: bytes = b""
	length: int = 0

	@staticmethod
	def FromBytes(data: bytes) -> "HTTPBodyBlob":
		return HTTPBodyBlob(payload=data, length=len(data))

	@property
	def raw(self) -> bytes:
		return self.payload

	@property
	def text(self) -> str:
		return self.payload.decode(DEFAULT_ENCODING)


# -----------------------------------------------------------------------------
#
# ERRORS
#
# -----------------------------------------------------------------------------


class HTTPRequestError(Exception):
	"""To be raised by handlers to signal an error. The error may carry the
	response to be sent, in which case post-processing steps still get
	to format that response before the error propagates."""

	def __init__(
		self,
		message: str,
		status: int | None = None,
		contentType: str | None = None,
		payload: Any | None = None,
		response: "HTTPResponse | None" = None,
	):
		super().__init__(message)
		self.message: str = message
		self.status: int | None = status
		self.contentType: str | None = contentType
		self.payload: Any | None = payload
		self.response: HTTPResponse | None = response


# -----------------------------------------------------------------------------
#
# REQUESTS
#
# -----------------------------------------------------------------------------


class HTTPRequest(ResponseFactory["HTTPResponse"]):
	"""Represents an HTTP requests, which also acts as a factory for
	responses."""

	__slots__ = ["protocol", "method", "path", "query", "_headers"]

	def __init__(
		self,
		method: str,
		path: str,
		query: dict[str, str] | None = None,
		headers: HTTPHeaders | dict[str, str] | None = None,
		protocol: str = "HTTP/1.1",
	):
		super().__init__()
		self.method: str = method
		self.path: str = path
		self.query: dict[str, str] | None = query
		self.protocol: str = protocol
		self._headers: HTTPHeaders = (
			headers
			if isinstance(headers, HTTPHeaders)
			else HTTPHeaders({headername(k): v for k, v in (headers or {}).items()})
		)

	@property
	def headers(self) -> dict[str, str]:
		return self._headers.headers

	def header(self, name: str) -> str | None:
		return self._headers.headers.get(headername(name))

	def param(
		self,
		name: str,
		default: T | None = None,
		processor: Callable[[str | T | None], str | T | None] | None = None,
	) -> str | T | None:
		v = self.query.get(name, default) if self.query else default
		return processor(v) if processor else v

	def respond(
		self,
		content: Any = None,
		contentType: str | None = None,
		status: int = 200,
		headers: dict[str, str] | None = None,
		message: str | None = None,
	) -> "HTTPResponse":
		return HTTPResponse.Create(
			status=status,
			message=message,
			content=content,
			contentType=contentType,
			protocol=self.protocol,
			headers=headers,
		)

	def respondJSON(
		self,
		value: Any,
		callback: str | None = None,
		*,
		status: int = 200,
		headers: dict[str, str] | None = None,
	) -> "HTTPResponse":
		"""Returns an empty response with `value` attached as a pending JSON
		payload (JSONP when `callback` is given), to be rendered by the
		`JSONResponseMiddleware`."""
		return self.respond(status=status, headers=headers).attach(
			JSONPayload.Make(value, callback)
		)

	def __str__(self) -> str:
		return f"Request({self.method} {self.path}{f'?{self.query}' if self.query else ''} {self.headers})"


# -----------------------------------------------------------------------------
#
# RESPONSE
#
# -----------------------------------------------------------------------------


class HTTPResponse:
	"""An HTTP response, which can hold one pending `JSONPayload` until
	it is rendered into the body."""

	__slots__ = ["protocol", "status", "message", "headers", "body", "payload"]

	@staticmethod
	def Create(
		content: str | bytes | None = None,
		contentType: str | None = None,
		headers: dict[str, str] | None = None,
		status: int = 200,
		message: str | None = None,
		protocol: str = "HTTP/1.1",
	) -> "HTTPResponse":
		"""Factory method to create HTTP response objects."""
		res = HTTPResponse(
			status=status,
			message=message or HTTP_STATUS.get(status, "Unknown status"),
			headers=HTTPHeaders({}),
			protocol=protocol,
		)
		if headers:
			res.setHeaders(dict(headers))
		if contentType is not None:
			res.setHeader("Content-Type", contentType)
		if content is None:
			pass
		elif isinstance(content, str) or isinstance(content, bytes):
			res.setBody(content)
		else:
			raise ValueError(f"Unsupported content {type(content)}:{content}")
		return res

	def __init__(
		self,
		protocol: str,
		status: int,
		message: str | None,
		headers: HTTPHeaders,
		body: HTTPBodyBlob | None = None,
	):
		self.protocol: str = protocol
		self.status: int = status
		self.message: str | None = message
		self.headers: HTTPHeaders = headers
		self.body: HTTPBodyBlob | None = body
		self.payload: JSONPayload | None = None

	@property
	def contentType(self) -> str | None:
		return self.headers.contentType

	def getHeader(self, name: str) -> str | None:
		return self.headers.headers.get(headername(name))

	def hasHeader(self, name: str) -> bool:
		return headername(name) in self.headers.headers

	def setHeader(self, name: str, value: str | int | None) -> "HTTPResponse":
		key: str = headername(name)
		if value is None:
			self.headers.headers.pop(key, None)
		else:
			self.headers.headers[key] = str(value)
		# We keep the key information in sync with the headers
		if key == "Content-Type":
			self.headers = self.headers._replace(
				contentType=None if value is None else str(value)
			)
		elif key == "Content-Length":
			self.headers = self.headers._replace(
				contentLength=None if value is None else int(value)
			)
		return self

	def setHeaders(self, headers: dict[str, str | int | None]) -> "HTTPResponse":
		for k, v in headers.items():
			self.setHeader(k, v)
		return self

	def setBody(self, content: str | bytes) -> "HTTPResponse":
		"""Replaces the body with the given content, updating the
		content length."""
		payload: bytes = (
			content.encode(DEFAULT_ENCODING) if isinstance(content, str) else content
		)
		self.body = HTTPBodyBlob.FromBytes(payload)
		return self.setHeader("Content-Length", self.body.length)

	def attach(self, payload: JSONPayload) -> "HTTPResponse":
		"""Attaches the payload, replacing any previously attached one."""
		self.payload = payload
		return self

	def detach(self) -> JSONPayload | None:
		"""Removes and returns the attached payload, if any."""
		payload: JSONPayload | None = self.payload
		self.payload = None
		return payload

	def head(self) -> bytes:
		"""Serializes the head as a payload."""
		status: int = 204 if self.body is None else self.status
		message: str = self.message or HTTP_STATUS.get(status, "Unknown status")
		lines: list[str] = [
			f"{headername(k)}: {v}" for k, v in self.headers.headers.items()
		]
		lines.insert(0, f"{self.protocol} {status} {message}")
		lines.append("")
		lines.append("")
		return "\r\n".join(lines).encode("ascii")

	def __str__(self) -> str:
		return f"Response({self.protocol} {self.status} {self.message} {self.headers} {self.body})"


# EOF
