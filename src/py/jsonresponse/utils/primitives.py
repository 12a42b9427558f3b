from typing import Any, Iterator, NamedTuple, TypeAlias
from time import struct_time
from decimal import Decimal
from datetime import date, datetime, time
from dataclasses import fields, is_dataclass
from pathlib import Path
from uuid import UUID
from enum import Enum

TLiteral: TypeAlias = None | bool | int | float | str
TPrimitive: TypeAlias = TLiteral | list[Any] | dict[str, Any]
TItems: TypeAlias = Iterator[tuple[Any, Any]]


class Cyclic:
	"""Stands for a reference back to a container that is being converted.
	No serializer accepts it, so cyclic values fail when serialized."""

	__slots__ = ()

	def __repr__(self) -> str:
		return "<cyclic>"


CYCLIC: Cyclic = Cyclic()


class Node(NamedTuple):
	"""A converted value. Containers are created empty and come with the
	`items` still to be converted, `sources` holds the values the node was
	derived from, which is what cycles are detected on."""

	value: Any
	items: TItems | None = None
	sources: tuple[Any, ...] = ()


def isLiteral(value: Any) -> bool:
	return value is None or type(value) in (bool, float, int, str)


def asKey(key: Any) -> TLiteral:
	"""Converts a mapping key, JSON only supports literal keys."""
	if isLiteral(key):
		return key
	elif isinstance(key, Enum):
		return asKey(key.value)
	else:
		return str(key)


def asNode(value: Any, path: set[int]) -> Node:
	"""Converts `value` to a literal, or to an empty container along with
	the items to fill it with. Values that are on the `path` of
	containers being converted are replaced by `CYCLIC`."""
	sources: list[Any] = []
	while not isLiteral(value):
		if id(value) in path or any(_ is value for _ in sources):
			return Node(CYCLIC)
		sources.append(value)
		if isinstance(value, Enum):
			value = value.value
		elif hasattr(value, "asPrimitive") and not isinstance(value, type):
			value = value.asPrimitive()
		elif isinstance(value, tuple) and hasattr(value, "_fields"):
			v = value
			return Node({}, ((k, getattr(v, k)) for k in v._fields), tuple(sources))
		elif isinstance(value, (list, tuple, set, frozenset)):
			return Node([], ((None, _) for _ in value), tuple(sources))
		elif is_dataclass(value) and not isinstance(value, type):
			v = value
			return Node(
				{}, ((f.name, getattr(v, f.name)) for f in fields(v)), tuple(sources)
			)
		elif isinstance(value, dict):
			return Node({}, ((asKey(k), v) for k, v in value.items()), tuple(sources))
		elif isinstance(value, (Decimal, Path, UUID)):
			return Node(str(value))
		elif isinstance(value, (datetime, date, time)):
			return Node(value.isoformat())
		elif isinstance(value, struct_time):
			return Node(list(value))
		else:
			# Unsupported, left to the serializer to reject
			return Node(value)
	return Node(value)


def asPrimitive(value: Any) -> Any:
	"""Converts the given value to a primitive value that can be converted
	to JSON. The result never shares a container with `value`, so it is
	a snapshot of the value at the time of the call.

	Objects that define an `asPrimitive()` method are converted with it,
	unsupported values are returned unchanged. The conversion uses an
	explicit stack, so it is not bound by the recursion limit."""
	path: set[int] = set()
	root: Node = asNode(value, path)
	if root.items is None:
		return root.value
	stack: list[Node] = [root]
	path.update(id(_) for _ in root.sources)
	while stack:
		parent: Node = stack[-1]
		item: tuple[Any, Any] | None = next(parent.items, None) if parent.items else None
		if item is None:
			stack.pop()
			path.difference_update(id(_) for _ in parent.sources)
			continue
		key, child = item
		node: Node = asNode(child, path)
		if isinstance(parent.value, list):
			parent.value.append(node.value)
		else:
			parent.value[key] = node.value
		if node.items is not None:
			stack.append(node)
			path.update(id(_) for _ in node.sources)
	return root.value


# EOF
