from typing import Any, Callable, Iterable
from inspect import iscoroutine

from .decorators import Extra, Transform
from .http.model import HTTPRequest, HTTPRequestError, HTTPResponse
from .middleware import AfterMiddleware, PostTransform
from .utils.logging import error


async def awaited(value: Any):
    if iscoroutine(value):
        return await value
    else:
        return value


# -----------------------------------------------------------------------------
#
# HANDLER
#
# -----------------------------------------------------------------------------


class Handler:
    """A handler wraps a function producing a response, along with the
    after middlewares to run once the function returns (or fails with an
    `HTTPRequestError`).

    The middlewares form a chain: a response is passed to the next
    middleware's `after`, an error to its `catch`. A `catch` returning a
    response puts the chain back on the success path, an error remaining
    at the end of the chain is raised."""

    @classmethod
    def Has(cls, value: Any) -> bool:
        return bool(Extra.Get(value, Extra.POST))

    @classmethod
    def Get(cls, value: Any) -> "Handler | None":
        return Handler(value, Extra.Get(value, Extra.POST)) if cls.Has(value) else None

    def __init__(
        self,
        functor: Callable[..., Any],
        post: Iterable[AfterMiddleware | Transform] | None = None,
    ):
        self.functor = functor
        self.post: list[AfterMiddleware] = [
            PostTransform(_) if isinstance(_, Transform) else _ for _ in (post or ())
        ]

    async def __call__(
        self, request: HTTPRequest, params: dict[str, Any] | None = None
    ) -> HTTPResponse:
        result: HTTPResponse | HTTPRequestError
        try:
            result = await awaited(self.functor(request, **(params or {})))
        except HTTPRequestError as e:
            result = e
        for middleware in self.post:
            try:
                result = (
                    middleware.catch(request, result)
                    if isinstance(result, HTTPRequestError)
                    else middleware.after(request, result)
                )
            except HTTPRequestError as e:
                result = e
        if isinstance(result, HTTPRequestError):
            error(
                "Request failed",
                result.status,
                Path=request.path,
                Reason=result.message,
            )
            raise result
        return result

    def __repr__(self) -> str:
        return f"(Handler '{self.functor}' :post({len(self.post)}))"


# EOF
