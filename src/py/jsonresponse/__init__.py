from .http.model import (
	HTTPRequest,
	HTTPResponse,
	HTTPRequestError,
)  # NOQA: F401
from .payload import JSONPayload, json, jsonp  # NOQA: F401
from .serialization import (
	Serializer,
	SerializationError,
	JSONSerializer,
	ORJSONSerializer,
	serializer,
)  # NOQA: F401
from .middleware import (
	AfterMiddleware,
	JSONResponseMiddleware,
	jsonresponse,
)  # NOQA: F401
from .decorators import post  # NOQA: F401
from .pipeline import Handler  # NOQA: F401


# EOF
