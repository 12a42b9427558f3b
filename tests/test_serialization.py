import pytest

from jsonresponse import config
from jsonresponse.payload import json
from jsonresponse.serialization import (
	JSONSerializer,
	ORJSONSerializer,
	SerializationError,
	Serializer,
	Serializers,
	serializer,
)

BACKENDS = ["json", "orjson"]


@pytest.mark.parametrize("name", BACKENDS)
def test_serialize_is_compact(name):
	text = serializer(name).serialize({"a": 1, "b": [True, None, 1.5, "x"]})
	assert text == '{"a":1,"b":[true,null,1.5,"x"]}'


@pytest.mark.parametrize("name", BACKENDS)
def test_serialize_keeps_unicode(name):
	assert serializer(name).serialize({"name": "Zoë"}) == '{"name":"Zoë"}'


@pytest.mark.parametrize("name", BACKENDS)
def test_serialize_accepts_non_string_keys(name):
	assert serializer(name).serialize({1: "one"}) == '{"1":"one"}'


@pytest.mark.parametrize("name", BACKENDS)
def test_unsupported_value_raises(name):
	with pytest.raises(SerializationError) as e:
		serializer(name).serialize({"marker": object()})
	assert isinstance(e.value.cause, TypeError)


@pytest.mark.parametrize("name", BACKENDS)
def test_cyclic_value_raises(name):
	items: list = []
	items.append(items)
	with pytest.raises(SerializationError):
		serializer(name).serialize(json(items).value)


def test_json_rejects_nan():
	with pytest.raises(SerializationError):
		JSONSerializer().serialize(float("nan"))


def test_serializer_by_name():
	assert isinstance(serializer("json"), JSONSerializer)
	assert isinstance(serializer("ORJSON"), ORJSONSerializer)


def test_serializer_defaults_to_config(monkeypatch):
	monkeypatch.setattr(config, "JSON_SERIALIZER", "orjson")
	assert isinstance(serializer(), ORJSONSerializer)
	monkeypatch.setattr(config, "JSON_SERIALIZER", "json")
	assert isinstance(serializer(), JSONSerializer)


def test_unknown_serializer():
	with pytest.raises(ValueError) as e:
		serializer("yaml")
	assert "json, orjson" in str(e.value)


def test_register_serializer(monkeypatch):
	class Upper(Serializer):
		name = "upper"

		def serialize(self, value):
			return JSONSerializer().serialize(value).upper()

	monkeypatch.setattr(Serializers, "All", dict(Serializers.All))
	Serializers.Register("upper", Upper)
	assert serializer("upper").serialize(["a"]) == '["A"]'


# EOF
