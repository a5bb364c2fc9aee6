# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Resolved declaration nodes (the analyzer's symbol graph).

Symbols are graph nodes: they compare by identity and carry a non-owning
`parent` back-reference. The parent chain ends at the root namespace (a
`NamespaceSymbol` with no parent).

The renderer only reads this graph. The one tolerated write is
`MethodSymbol.compute_current_bogus_state`, which memoizes its answer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar, Optional

from diagnames.core.diagnostics import RenderError
from diagnames.core.types_core import (
	EMPTY_TYPES,
	AggregateType,
	CType,
	ErrorType,
	TypeArray,
)


# Metadata name the analyzer gives every indexer; displayed as `this`.
INDEXER_INTERNAL_NAME = "$Item$"
CTOR_INTERNAL_NAME = ".ctor"
DTOR_INTERNAL_NAME = "Finalize"


class SymbolKind(Enum):
	"""Symbol kinds. Everything but SCOPE is renderable."""

	NAMESPACE = auto()
	AGGREGATE = auto()
	METHOD = auto()
	PROPERTY = auto()
	FIELD = auto()
	EVENT = auto()
	TYPE_PARAMETER = auto()
	LOCAL_VARIABLE = auto()
	SCOPE = auto()


class AggKind(Enum):
	CLASS = auto()
	STRUCT = auto()
	INTERFACE = auto()
	ENUM = auto()


@dataclass(eq=False)
class Symbol:
	"""Base class for every declaration node."""

	kind: ClassVar[SymbolKind]

	name: Optional[str] = None
	parent: Optional["Symbol"] = field(default=None, repr=False)


@dataclass(eq=False)
class NamespaceSymbol(Symbol):
	kind: ClassVar[SymbolKind] = SymbolKind.NAMESPACE

	def is_root(self) -> bool:
		return self.parent is None


@dataclass(eq=False)
class AggregateSymbol(Symbol):
	"""
	Class/struct/interface/enum declaration.

	`type_vars` are the parameters this declaration introduces; their
	`TypeParameterType.index` continues after the enclosing aggregates'
	parameters.
	"""

	kind: ClassVar[SymbolKind] = SymbolKind.AGGREGATE

	agg_kind: AggKind = AggKind.CLASS
	type_vars: TypeArray = EMPTY_TYPES
	# Declaration comes from a reference the analyzer could not load.
	is_bogus: bool = False

	def outer_aggregate(self) -> Optional["AggregateSymbol"]:
		return self.parent if isinstance(self.parent, AggregateSymbol) else None

	@property
	def type_vars_all(self) -> TypeArray:
		outer = self.outer_aggregate()
		if outer is None:
			return self.type_vars
		return outer.type_vars_all + self.type_vars

	def this_type(self) -> AggregateType:
		"""The declaration instantiated over its own type parameters."""
		outer = self.outer_aggregate()
		return AggregateType(
			aggregate=self,
			type_args=self.type_vars,
			outer_type=outer.this_type() if outer is not None else None,
		)


@dataclass(frozen=True)
class SymWithType:
	"""A member together with the aggregate instantiation it was found on."""

	sym: Optional[Symbol]
	ats: Optional[AggregateType] = None

	def __bool__(self) -> bool:
		return self.sym is not None


@dataclass(eq=False)
class MethodSymbol(Symbol):
	kind: ClassVar[SymbolKind] = SymbolKind.METHOD

	params: TypeArray = EMPTY_TYPES
	return_type: Optional[CType] = None
	type_vars: TypeArray = EMPTY_TYPES
	is_constructor: bool = False
	is_destructor: bool = False
	is_conversion_operator: bool = False
	is_implicit: bool = False
	is_operator: bool = False
	is_varargs: bool = False
	is_param_array: bool = False
	# Explicit interface implementation: `explicit_impl` is the interface
	# member it implements; `err_explicit_impl` names it when that failed to
	# resolve.
	is_explicit_impl: bool = False
	explicit_impl: Optional[SymWithType] = None
	err_explicit_impl: Optional[ErrorType] = None
	# Set when this method is a property or event accessor.
	owner_property: Optional["PropertySymbol"] = field(default=None, repr=False)
	owner_event: Optional["EventSymbol"] = field(default=None, repr=False)
	_bogus: Optional[bool] = field(default=None, init=False, repr=False)

	def is_property_accessor(self) -> bool:
		return self.owner_property is not None

	def is_event_accessor(self) -> bool:
		return self.owner_event is not None

	def get_class(self) -> AggregateSymbol:
		if not isinstance(self.parent, AggregateSymbol):
			raise RenderError(f"method {self.name!r} is not declared in an aggregate")
		return self.parent

	def compute_current_bogus_state(self) -> bool:
		"""
		True if the signature references an unresolved declaration.

		Computed once and cached on the symbol.
		"""
		if self._bogus is None:
			bogus = self.return_type is not None and self.return_type.is_bogus()
			self._bogus = bogus or any(p.is_bogus() for p in self.params)
		return self._bogus


@dataclass(eq=False)
class PropertySymbol(Symbol):
	"""Property or indexer. Indexers carry `params` and the name `$Item$`."""

	kind: ClassVar[SymbolKind] = SymbolKind.PROPERTY

	is_indexer: bool = False
	params: TypeArray = EMPTY_TYPES
	is_param_array: bool = False
	is_explicit_impl: bool = False
	explicit_impl: Optional[SymWithType] = None
	err_explicit_impl: Optional[ErrorType] = None
	getter: Optional[MethodSymbol] = field(default=None, repr=False)
	setter: Optional[MethodSymbol] = field(default=None, repr=False)


@dataclass(eq=False)
class FieldSymbol(Symbol):
	kind: ClassVar[SymbolKind] = SymbolKind.FIELD


@dataclass(eq=False)
class EventSymbol(Symbol):
	kind: ClassVar[SymbolKind] = SymbolKind.EVENT

	adder: Optional[MethodSymbol] = field(default=None, repr=False)
	remover: Optional[MethodSymbol] = field(default=None, repr=False)


@dataclass(eq=False)
class TypeParameterSymbol(Symbol):
	kind: ClassVar[SymbolKind] = SymbolKind.TYPE_PARAMETER

	index: int = 0
	is_method_type_param: bool = False


@dataclass(eq=False)
class LocalVariableSymbol(Symbol):
	kind: ClassVar[SymbolKind] = SymbolKind.LOCAL_VARIABLE


@dataclass(eq=False)
class ScopeSymbol(Symbol):
	"""Block scope; part of the analyzer graph but never named in diagnostics."""

	kind: ClassVar[SymbolKind] = SymbolKind.SCOPE


__all__ = [
	"INDEXER_INTERNAL_NAME",
	"CTOR_INTERNAL_NAME",
	"DTOR_INTERNAL_NAME",
	"SymbolKind",
	"AggKind",
	"Symbol",
	"NamespaceSymbol",
	"AggregateSymbol",
	"SymWithType",
	"MethodSymbol",
	"PropertySymbol",
	"FieldSymbol",
	"EventSymbol",
	"TypeParameterSymbol",
	"LocalVariableSymbol",
	"ScopeSymbol",
]
