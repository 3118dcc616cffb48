"""
Value model for loosely typed server responses

The server collapses a one-element list into a bare scalar in some places and
uses the boolean ``false`` as its null marker in others. Both conventions are
modelled explicitly here so the rest of the client never inspects raw payload
types itself:

- OneOrMany: a single value or a list of values, always convertible to a list
- PresentOrAbsent: ``false`` on the wire means absent, anything else is present
- decode_value: typed extraction of a decoded value (strict pydantic validation)
"""

import functools
import typing
from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, List, Optional, Sequence, Tuple, TypeVar

from pydantic import TypeAdapter, ValidationError

from odoo_rpc.errors import DecodeError, MalformedResponse

T = TypeVar("T")


@dataclass(frozen=True)
class Credentials:
    """Connection parameters for one database on one server"""
    url: str
    db: str
    username: str
    password: str = field(repr=False)

    @property
    def base_url(self) -> str:
        return self.url.rstrip("/")


def _shape_matches(value: Any, item_type: Any) -> bool:
    """Check the outer shape of a value against the expected item type

    Only the runtime class is checked (``Dict[str, int]`` checks ``dict``).
    Booleans never count as numbers, since the server uses ``false`` as null.
    """
    if item_type is None or item_type is Any:
        return True
    shape = typing.get_origin(item_type) or item_type
    if not isinstance(shape, type):
        # Union, Literal and friends are left to typed decoding
        return True
    if isinstance(value, bool):
        return shape is bool
    if shape is float:
        return isinstance(value, (int, float))
    return isinstance(value, shape)


@dataclass(frozen=True)
class OneOrMany(Generic[T]):
    """Either a single value or a list of values"""
    values: Tuple[T, ...]
    many: bool

    @classmethod
    def single(cls, value: T) -> "OneOrMany[T]":
        return cls(values=(value,), many=False)

    @classmethod
    def of(cls, values: Sequence[T]) -> "OneOrMany[T]":
        return cls(values=tuple(values), many=True)

    @classmethod
    def _coerce(cls, payload: Any, item_type: Any) -> Optional["OneOrMany"]:
        if isinstance(payload, cls):
            wrapped = payload
        elif isinstance(payload, (list, tuple)):
            wrapped = cls.of(payload)
        else:
            wrapped = cls.single(payload)
        if all(_shape_matches(value, item_type) for value in wrapped.values):
            return wrapped
        return None

    @classmethod
    def from_wire(cls, payload: Any, item_type: Any = None) -> "OneOrMany":
        """Interpret a decoded payload of unknown cardinality

        Args:
            payload: Decoded JSON-RPC/XML-RPC value
            item_type: Expected element type (``int``, ``dict``, ``Dict[str, Any]``...)

        Returns:
            OneOrMany: Many for arrays, Single for a scalar of the expected shape

        Raises:
            MalformedResponse: Payload is neither an array nor a matching scalar
            DecodeError: Elements have the right shape but fail typed decoding
        """
        wrapped = cls._coerce(payload, item_type)
        if wrapped is None:
            raise MalformedResponse(
                f"Expected {_type_name(item_type)} or a list of them, got {payload!r}"
            )
        if item_type is not None and not isinstance(item_type, type):
            wrapped = cls(
                values=tuple(decode_value(value, item_type) for value in wrapped.values),
                many=wrapped.many,
            )
        return wrapped

    @property
    def is_single(self) -> bool:
        return not self.many

    def to_list(self) -> List[T]:
        return list(self.values)

    def __iter__(self) -> Iterator[T]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class PresentOrAbsent(Generic[T]):
    """A value the server may replace with ``false`` when it has none"""
    value: Optional[T] = None
    present: bool = False

    @classmethod
    def absent(cls) -> "PresentOrAbsent[T]":
        return cls()

    @classmethod
    def of(cls, value: T) -> "PresentOrAbsent[T]":
        return cls(value=value, present=True)

    @classmethod
    def from_wire(cls, payload: Any, item_type: Any = None) -> "PresentOrAbsent":
        # Only a literal boolean is the null marker; every other shape is a value
        if isinstance(payload, bool):
            return cls.absent()
        return cls.of(decode_value(payload, item_type))

    @property
    def is_absent(self) -> bool:
        return not self.present

    def get(self, default: Any = None) -> Any:
        return self.value if self.present else default

    def to_optional(self) -> Optional[T]:
        return self.get()


def normalize_ids(ids: Any) -> List[int]:
    """Normalize a bare id, a sequence of ids or a OneOrMany to a list of ids

    Raises:
        TypeError: Input contains something other than integer ids
    """
    wrapped = OneOrMany._coerce(ids, int)
    if wrapped is None:
        raise TypeError(f"Record ids must be integers, got {ids!r}")
    return wrapped.to_list()


@functools.lru_cache(maxsize=None)
def _type_adapter(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


def decode_value(value: Any, type_: Any = None) -> Any:
    """Decode an extracted value into the requested type

    Args:
        value: Value as produced by the wire codec
        type_: Target type; None or Any returns the value untouched.
            ``OneOrMany[X]`` and ``PresentOrAbsent[X]`` use the server's
            cardinality and null conventions, everything else goes through
            pydantic validation in strict mode (no "12" -> 12 coercion).

    Raises:
        DecodeError: The value cannot be converted to ``type_``
        MalformedResponse: A OneOrMany target received an unexpected shape
    """
    if type_ is None or type_ is Any:
        return value

    origin = typing.get_origin(type_) or type_
    if origin in (OneOrMany, PresentOrAbsent):
        args = typing.get_args(type_)
        return origin.from_wire(value, args[0] if args else None)

    try:
        return _type_adapter(type_).validate_python(value, strict=True)
    except ValidationError as exc:
        raise DecodeError(f"Cannot decode {value!r} as {_type_name(type_)}: {exc}") from exc


def _type_name(type_: Any) -> str:
    if type_ is None:
        return "a value"
    return getattr(type_, "__name__", None) or repr(type_)
