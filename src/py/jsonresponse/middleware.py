from abc import ABC
from typing import Any, Callable, NamedTuple, NoReturn, TypeVar

from . import config
from .decorators import Transform, post
from .http.model import HTTPRequest, HTTPRequestError, HTTPResponse
from .payload import JSONPayload
from .serialization import SerializationError, Serializer
from .serialization import serializer as getSerializer
from .utils.logging import debug, warning

T = TypeVar("T")

CONTENT_TYPE_JSON: str = "application/json"
CONTENT_TYPE_JSONP: str = "text/javascript; charset=utf-8"

# -----------------------------------------------------------------------------
#
# AFTER MIDDLEWARE
#
# -----------------------------------------------------------------------------


class AfterMiddleware(ABC):
	"""A post-processing step run once the handler is done. Responses
	go through `after`, errors go through `catch`, which can either
	recover by returning a response or keep the error flowing by raising."""

	def after(self, request: HTTPRequest, response: HTTPResponse) -> HTTPResponse:
		return response

	def catch(self, request: HTTPRequest, error: HTTPRequestError) -> HTTPResponse:
		raise error


class PostTransform(AfterMiddleware):
	"""Adapts a `(request, response, *args, **kwargs)` function, as
	registered with `@post`, to an after middleware. Errors are passed
	through untouched."""

	def __init__(self, transform: Transform):
		self.transform: Transform = transform

	def after(self, request: HTTPRequest, response: HTTPResponse) -> HTTPResponse:
		t = self.transform
		res = t.transform(request, response, *t.args, **t.kwargs)
		return response if res is None else res

	def __repr__(self) -> str:
		return f"(PostTransform {self.transform.transform})"


# -----------------------------------------------------------------------------
#
# JSON RESPONSE
#
# -----------------------------------------------------------------------------


class Rendered(NamedTuple):
	"""The body and content type rendered from a payload."""

	contentType: str
	body: str


class JSONResponseMiddleware(AfterMiddleware):
	"""Renders the `JSONPayload` attached to a response as the response
	body, either as JSON or as JSONP when the payload has a callback.

	The payload is removed from the response, so a response is only ever
	rendered once. The content type is only set when the response does not
	have one already. If the payload can't be serialized, the response is
	returned as it was, unless the middleware is `strict`, in which case
	the `SerializationError` is raised."""

	def __init__(
		self,
		serializer: Serializer | str | None = None,
		*,
		strict: bool | None = None,
	):
		self.serializer: Serializer = (
			serializer
			if isinstance(serializer, Serializer)
			else getSerializer(serializer)
		)
		self.strict: bool = config.JSON_STRICT if strict is None else strict

	def render(self, payload: JSONPayload) -> Rendered:
		text: str = self.serializer.serialize(payload.value)
		if payload.callback is not None:
			return Rendered(CONTENT_TYPE_JSONP, f"{payload.callback}({text})")
		else:
			return Rendered(CONTENT_TYPE_JSON, text)

	def after(self, request: HTTPRequest, response: HTTPResponse) -> HTTPResponse:
		payload: JSONPayload | None = response.detach()
		if payload is None:
			return response
		try:
			rendered: Rendered = self.render(payload)
		except SerializationError as e:
			if self.strict:
				raise
			warning(
				"Payload could not be serialized, response left unchanged",
				Serializer=self.serializer.name,
				Path=request.path,
				Reason=str(e.cause or e),
			)
			return response
		if not response.hasHeader("Content-Type"):
			response.setHeader("Content-Type", rendered.contentType)
		response.setBody(rendered.body)
		debug(
			"Rendered JSON payload",
			Path=request.path,
			Callback=payload.callback,
			Length=len(rendered.body),
		)
		return response

	def catch(self, request: HTTPRequest, error: HTTPRequestError) -> NoReturn:
		if error.response is not None:
			try:
				error.response = self.after(request, error.response)
			except SerializationError as e:
				# Strict mode: the request error keeps flowing, with the
				# serialization failure as its cause.
				raise error from e
		raise error

	def __repr__(self) -> str:
		return f"(JSONResponseMiddleware {self.serializer.name}{' :strict' if self.strict else ''})"


def jsonresponse(function: T) -> T:
	"""Decorates a handler function so that its `JSONPayload` gets rendered
	by a `JSONResponseMiddleware` using the configured serializer."""
	decorator: Callable[[Any], Any] = post(JSONResponseMiddleware())
	return decorator(function)


# EOF
