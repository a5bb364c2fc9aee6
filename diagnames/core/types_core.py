# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Resolved type nodes as handed over by the analyzer.

Types are immutable values: two structurally equal types compare equal, which
lets substitution return the very same object when nothing changed. Aggregate
types point at their (identity-compared) `AggregateSymbol`.

`TypeArray` is a plain tuple; its order is declaration order and is preserved
verbatim wherever it is rendered.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
	from diagnames.core.symbols import AggregateSymbol, NamespaceSymbol


class TypeKind(Enum):
	"""Closed set of type variants understood by the renderer."""

	AGGREGATE = auto()
	TYPE_PARAMETER = auto()
	ARRAY = auto()
	POINTER = auto()
	NULLABLE = auto()
	PARAMETER_MODIFIER = auto()
	ERROR = auto()
	NULL = auto()
	VOID = auto()
	BOUND_LAMBDA = auto()
	UNBOUND_LAMBDA = auto()
	METHOD_GROUP = auto()
	ARGUMENT_LIST = auto()
	OPEN_PLACEHOLDER = auto()


class CType:
	"""Base class for all type nodes."""

	kind: ClassVar[TypeKind]

	def is_bogus(self) -> bool:
		"""True if this type references a declaration the analyzer could not resolve."""
		return False


TypeArray = Tuple[CType, ...]

EMPTY_TYPES: TypeArray = ()


@dataclass(frozen=True)
class AggregateType(CType):
	"""
	An instantiated class/struct/interface/enum.

	`type_args` are this level's arguments only; for a nested generic type
	the enclosing instantiation lives in `outer_type`.
	"""

	kind: ClassVar[TypeKind] = TypeKind.AGGREGATE

	aggregate: "AggregateSymbol"
	type_args: TypeArray = EMPTY_TYPES
	outer_type: Optional["AggregateType"] = None

	def __post_init__(self) -> None:
		object.__setattr__(self, "type_args", tuple(self.type_args))

	@property
	def type_args_all(self) -> TypeArray:
		"""Outer instantiation arguments followed by this level's arguments."""
		if self.outer_type is None:
			return self.type_args
		return self.outer_type.type_args_all + self.type_args

	def is_bogus(self) -> bool:
		if self.aggregate.is_bogus:
			return True
		if self.outer_type is not None and self.outer_type.is_bogus():
			return True
		return any(arg.is_bogus() for arg in self.type_args)


@dataclass(frozen=True)
class TypeParameterType(CType):
	"""
	Occurrence of a type parameter.

	`index` is the position among all parameters of the owner (for a nested
	type that includes the enclosing types' parameters).
	"""

	kind: ClassVar[TypeKind] = TypeKind.TYPE_PARAMETER

	index: int
	is_method_type_param: bool = False
	name: Optional[str] = None


@dataclass(frozen=True)
class ArrayType(CType):
	"""`rank` dimensions of `element`; `is_sz_array` marks the rank-1 vector shape."""

	kind: ClassVar[TypeKind] = TypeKind.ARRAY

	element: CType
	rank: int = 1
	is_sz_array: bool = True

	@property
	def base_element_type(self) -> CType:
		"""Innermost non-array element type."""
		elem = self.element
		while isinstance(elem, ArrayType):
			elem = elem.element
		return elem

	def is_bogus(self) -> bool:
		return self.element.is_bogus()


@dataclass(frozen=True)
class PointerType(CType):
	kind: ClassVar[TypeKind] = TypeKind.POINTER

	referent: CType

	def is_bogus(self) -> bool:
		return self.referent.is_bogus()


@dataclass(frozen=True)
class NullableType(CType):
	kind: ClassVar[TypeKind] = TypeKind.NULLABLE

	underlying: CType

	def is_bogus(self) -> bool:
		return self.underlying.is_bogus()


@dataclass(frozen=True)
class ParameterModifierType(CType):
	"""`ref T` / `out T` in a parameter position."""

	kind: ClassVar[TypeKind] = TypeKind.PARAMETER_MODIFIER

	parameter_type: CType
	is_out: bool = False

	def is_bogus(self) -> bool:
		return self.parameter_type.is_bogus()


@dataclass(frozen=True)
class ErrorType(CType):
	"""
	Stand-in for a type the analyzer could not resolve.

	Invariants:
	- With a parent (`type_parent` or `ns_parent`), `name_text` and `type_args`
	  are both set and the type renders as `Parent.Name<Args>`.
	- Without a parent, `type_args` is None and the type renders as `<error>`.
	"""

	kind: ClassVar[TypeKind] = TypeKind.ERROR

	type_parent: Optional[CType] = None
	ns_parent: Optional["NamespaceSymbol"] = None
	name_text: Optional[str] = None
	type_args: Optional[TypeArray] = None

	def __post_init__(self) -> None:
		if self.type_args is not None:
			object.__setattr__(self, "type_args", tuple(self.type_args))

	def has_type_parent(self) -> bool:
		return self.type_parent is not None

	def has_parent(self) -> bool:
		return self.type_parent is not None or self.ns_parent is not None


@dataclass(frozen=True)
class NullType(CType):
	kind: ClassVar[TypeKind] = TypeKind.NULL


@dataclass(frozen=True)
class VoidType(CType):
	kind: ClassVar[TypeKind] = TypeKind.VOID


@dataclass(frozen=True)
class BoundLambdaType(CType):
	kind: ClassVar[TypeKind] = TypeKind.BOUND_LAMBDA


@dataclass(frozen=True)
class UnboundLambdaType(CType):
	kind: ClassVar[TypeKind] = TypeKind.UNBOUND_LAMBDA


@dataclass(frozen=True)
class MethodGroupType(CType):
	kind: ClassVar[TypeKind] = TypeKind.METHOD_GROUP


@dataclass(frozen=True)
class ArgumentListType(CType):
	kind: ClassVar[TypeKind] = TypeKind.ARGUMENT_LIST


@dataclass(frozen=True)
class OpenTypePlaceholderType(CType):
	"""Unresolved generic hole; renders as nothing."""

	kind: ClassVar[TypeKind] = TypeKind.OPEN_PLACEHOLDER


__all__ = [
	"TypeKind",
	"CType",
	"TypeArray",
	"EMPTY_TYPES",
	"AggregateType",
	"TypeParameterType",
	"ArrayType",
	"PointerType",
	"NullableType",
	"ParameterModifierType",
	"ErrorType",
	"NullType",
	"VoidType",
	"BoundLambdaType",
	"UnboundLambdaType",
	"MethodGroupType",
	"ArgumentListType",
	"OpenTypePlaceholderType",
]
