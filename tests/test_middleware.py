import io

import pytest

from jsonresponse import (
	HTTPRequest,
	HTTPRequestError,
	JSONResponseMiddleware,
	SerializationError,
	config,
	json,
	jsonp,
)
from jsonresponse.serialization import ORJSONSerializer
from jsonresponse.utils import logging

BACKENDS = ["json", "orjson"]


def snapshot(response):
	return (response.status, dict(response.headers.headers), response.body)


@pytest.fixture
def request_():
	return HTTPRequest("GET", "/data")


@pytest.fixture
def stderr(monkeypatch):
	stream = io.StringIO()
	monkeypatch.setattr(logging, "ERR", stream)
	return stream


def test_no_payload_is_a_no_op(request_):
	response = request_.respond("<p>Hi</p>", contentType="text/html")
	before = snapshot(response)
	head = response.head()
	assert JSONResponseMiddleware().after(request_, response) is response
	assert snapshot(response) == before
	assert response.head() == head


@pytest.mark.parametrize("name", BACKENDS)
def test_renders_json(request_, name):
	response = json({"a": 1, "b": [True, None]}).attach(request_.respond())
	response = JSONResponseMiddleware(name).after(request_, response)
	assert response.body is not None
	assert response.body.raw == b'{"a":1,"b":[true,null]}'
	assert response.getHeader("Content-Type") == "application/json"
	assert response.getHeader("Content-Length") == "23"
	assert response.payload is None


@pytest.mark.parametrize("name", BACKENDS)
def test_renders_jsonp(request_, name):
	response = jsonp([1, 2], "cb").attach(request_.respond())
	response = JSONResponseMiddleware(name).after(request_, response)
	assert response.body is not None
	assert response.body.raw == b"cb([1,2])"
	assert response.getHeader("Content-Type") == "text/javascript; charset=utf-8"


def test_callback_is_used_verbatim(request_):
	response = jsonp("x", "window.app.load").attach(request_.respond())
	response = JSONResponseMiddleware().after(request_, response)
	assert response.body is not None
	assert response.body.raw == b'window.app.load("x")'


@pytest.mark.parametrize("payload", [json({"a": 1}), jsonp({"a": 1}, "cb")])
def test_existing_content_type_is_kept(request_, payload):
	response = payload.attach(request_.respond(contentType="text/plain"))
	response = JSONResponseMiddleware().after(request_, response)
	assert response.getHeader("Content-Type") == "text/plain"
	assert response.body is not None
	assert b'{"a":1}' in response.body.raw


def test_existing_body_is_replaced(request_):
	response = json([]).attach(request_.respond("previous body"))
	response = JSONResponseMiddleware().after(request_, response)
	assert response.body is not None
	assert response.body.raw == b"[]"
	assert response.getHeader("Content-Length") == "2"


@pytest.mark.parametrize("name", BACKENDS)
def test_serialization_failure_leaves_response_unchanged(request_, stderr, name):
	response = request_.respond("before", contentType="text/plain", status=202)
	json({"marker": object()}).attach(response)
	before = snapshot(response)
	result = JSONResponseMiddleware(name).after(request_, response)
	assert result is response
	assert snapshot(response) == before
	assert response.payload is None
	assert "could not be serialized" in stderr.getvalue()


def test_serialization_failure_on_empty_response(request_, stderr):
	response = json(float("inf")).attach(request_.respond())
	response = JSONResponseMiddleware("json").after(request_, response)
	assert response.body is None
	assert not response.hasHeader("Content-Type")
	assert not response.hasHeader("Content-Length")


def test_strict_mode_raises(request_):
	response = json({"marker": object()}).attach(request_.respond())
	with pytest.raises(SerializationError):
		JSONResponseMiddleware(strict=True).after(request_, response)


def test_strict_mode_from_config(monkeypatch):
	monkeypatch.setattr(config, "JSON_STRICT", True)
	assert JSONResponseMiddleware().strict
	assert not JSONResponseMiddleware(strict=False).strict


def test_serializer_instance_is_used():
	backend = ORJSONSerializer()
	assert JSONResponseMiddleware(backend).serializer is backend


def test_payload_is_rendered_once(request_):
	middleware = JSONResponseMiddleware()
	response = json({"n": 1}).attach(request_.respond())
	middleware.after(request_, response)
	response.setBody("changed")
	before = snapshot(response)
	middleware.after(request_, response)
	assert snapshot(response) == before


@pytest.mark.parametrize("name", BACKENDS)
def test_catch_renders_error_response(request_, name):
	response = json({"error": "Not allowed"}).attach(request_.respond(status=403))
	error = HTTPRequestError("Not allowed", status=403, response=response)
	with pytest.raises(HTTPRequestError) as e:
		JSONResponseMiddleware(name).catch(request_, error)
	assert e.value is error
	assert e.value.status == 403
	assert e.value.response is not None
	assert e.value.response.status == 403
	assert e.value.response.body is not None
	assert e.value.response.body.raw == b'{"error":"Not allowed"}'
	assert e.value.response.getHeader("Content-Type") == "application/json"


def test_catch_without_response(request_):
	error = HTTPRequestError("Boom", status=500)
	with pytest.raises(HTTPRequestError) as e:
		JSONResponseMiddleware().catch(request_, error)
	assert e.value is error
	assert e.value.response is None


def test_catch_with_unserializable_payload(request_, stderr):
	response = request_.respond("Server error", contentType="text/plain", status=500)
	json(object()).attach(response)
	before = snapshot(response)
	error = HTTPRequestError("Boom", status=500, response=response)
	with pytest.raises(HTTPRequestError) as e:
		JSONResponseMiddleware().catch(request_, error)
	assert e.value.response is response
	assert snapshot(response) == before


@pytest.mark.parametrize("name", BACKENDS)
def test_cyclic_payload_leaves_response_unchanged(request_, stderr, name):
	items: list = []
	items.append(items)
	items.append(items)
	payload = json(items)
	response = payload.attach(request_.respond("before", contentType="text/plain"))
	before = snapshot(response)
	JSONResponseMiddleware(name).after(request_, response)
	assert snapshot(response) == before
	assert "could not be serialized" in stderr.getvalue()


@pytest.mark.parametrize("name", BACKENDS)
def test_deep_payload_is_rendered_from_snapshot(request_, name):
	leaf = [1]
	value: list = leaf
	for _ in range(70):
		value = [value]
	response = json(value).attach(request_.respond())
	leaf.append(2)
	response = JSONResponseMiddleware(name).after(request_, response)
	assert response.body is not None
	assert response.body.raw == b"[" * 71 + b"1" + b"]" * 71


def test_strict_catch_keeps_request_error(request_):
	response = json({"x": object()}).attach(request_.respond(status=410))
	error = HTTPRequestError("Gone", status=410, response=response)
	with pytest.raises(HTTPRequestError) as e:
		JSONResponseMiddleware(strict=True).catch(request_, error)
	assert e.value is error
	assert e.value.status == 410
	assert isinstance(e.value.__cause__, SerializationError)
	assert e.value.response is response
	assert response.body is None


# EOF
