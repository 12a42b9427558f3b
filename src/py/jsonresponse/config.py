from os import getenv

DEFAULT_ENCODING: str = "utf8"

# Name of the serializer backend used by the finalizer, `json` (stdlib) or
# `orjson`.
JSON_SERIALIZER: str = getenv("JSONRESPONSE_SERIALIZER", "json")

# In strict mode, a payload that can't be serialized raises instead of
# leaving the response untouched.
JSON_STRICT: bool = getenv("JSONRESPONSE_STRICT", "0") == "1"

LOG_LEVEL: str = getenv("JSONRESPONSE_LOG_LEVEL", "info").lower()

# EOF
