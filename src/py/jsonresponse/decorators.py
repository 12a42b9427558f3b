from typing import ClassVar, Callable, NamedTuple, TypeVar, Any, cast

T = TypeVar("T")


class Transform(NamedTuple):
    """Represents a transformation to be applied to a request handler"""

    transform: Callable[..., Any]
    args: tuple[Any, ...]
    kwargs: dict[str, Any]


class Extra:
    """Defines the attributes used by decorators"""

    POST: ClassVar[str] = "_jsonresponse_post"
    # When the value has no `__dict__` (builtins, slotted objects), we're
    # collecting annotations by object id.
    Annotations: ClassVar[dict[int, dict[str, Any]]] = {}

    @staticmethod
    def Meta(scope: Any, *, strict: bool = False) -> dict[str, Any]:
        """Returns the dictionary of meta attributes for the given value."""
        if isinstance(scope, type):
            if not hasattr(scope, "__jsonresponse__"):
                setattr(scope, "__jsonresponse__", {})
            return cast(dict[str, Any], getattr(scope, "__jsonresponse__"))
        elif hasattr(scope, "__dict__"):
            return cast(dict[str, Any], scope.__dict__)
        elif strict:
            raise RuntimeError(f"Metadata cannot be attached to object: {scope}")
        else:
            return Extra.Annotations.setdefault(id(scope), {})

    @staticmethod
    def Get(scope: Any, key: str) -> Any:
        """Returns the meta attribute `key` of the given value, if any."""
        if (sid := id(scope)) in Extra.Annotations:
            return Extra.Annotations[sid].get(key)
        else:
            return getattr(scope, key, None)


def post(transform: Any, *args: Any, **kwargs: Any) -> Callable[[T], T]:
    """Registers the given `transform` as a post-processing step of the
    decorated function. The transform is either an `AfterMiddleware` or a
    function taking `(request, response, *args, **kwargs)`. Post steps run
    in the order in which they are declared, top to bottom."""

    def decorator(function: T) -> T:
        v = Extra.Meta(function).setdefault(Extra.POST, [])
        # Decorators are applied bottom-up, so we insert first to keep
        # the declaration order.
        v.insert(
            0,
            transform
            if hasattr(transform, "after")
            else Transform(transform, args, kwargs),
        )
        return function

    return decorator


# EOF
