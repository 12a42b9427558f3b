"""
JSON/JSONP Example

This runs a few handlers decorated with `@jsonresponse` against offline
requests, and prints the resulting responses.
Features shown:
- `request.respondJSON` attaching a payload, rendered after the handler
- JSONP when a `callback` parameter is given
- Error responses carrying a JSON payload
- A payload that can't be serialized leaves the response untouched

Usage:
    python jsonp.py
    JSONRESPONSE_SERIALIZER=orjson JSONRESPONSE_LOG_LEVEL=debug python jsonp.py
"""

import asyncio
from datetime import datetime

from jsonresponse import (
	Handler,
	HTTPRequest,
	HTTPRequestError,
	HTTPResponse,
	json,
	jsonresponse,
	post,
)
from jsonresponse.utils.logging import info


@post
def server_header(request: HTTPRequest, response: HTTPResponse) -> HTTPResponse:
	return response.setHeader("X-Server", "jsonresponse")


@jsonresponse
@server_header
def time(request: HTTPRequest) -> HTTPResponse:
	return request.respondJSON(
		{"now": datetime.now(), "path": request.path}, request.param("callback")
	)


@jsonresponse
def item(request: HTTPRequest, id: int) -> HTTPResponse:
	if id != 1:
		raise HTTPRequestError(
			"Item not found",
			status=404,
			response=request.respondJSON({"error": "Item not found"}, status=404),
		)
	return request.respondJSON({"id": id, "name": "Widget"})


@jsonresponse
def broken(request: HTTPRequest) -> HTTPResponse:
	return json({"socket": object()}).attach(request.respondText("Nothing to see"))


async def main() -> None:
	cases = [
		(time, HTTPRequest("GET", "/time"), {}),
		(time, HTTPRequest("GET", "/time", {"callback": "onTime"}), {}),
		(item, HTTPRequest("GET", "/item/1"), {"id": 1}),
		(item, HTTPRequest("GET", "/item/2"), {"id": 2}),
		(broken, HTTPRequest("GET", "/broken"), {}),
	]
	for function, request, params in cases:
		handler = Handler.Get(function)
		if not handler:
			continue
		try:
			response = await handler(request, params)
		except HTTPRequestError as e:
			if not (response := e.response):
				continue
		info(
			"Response",
			Path=request.path,
			Status=response.status,
			ContentType=response.contentType,
			Body=response.body.text if response.body else None,
		)


if __name__ == "__main__":
	asyncio.run(main())

# EOF
