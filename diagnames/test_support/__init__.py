# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Shared helpers for tests that need a symbol graph.

These builders wire parent back-references and type parameter indices the way
an analyzer would, so test bodies can stay focused on the expected text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from diagnames.core.global_symbols import GlobalSymbols
from diagnames.core.symbols import (
	AggKind,
	AggregateSymbol,
	MethodSymbol,
	NamespaceSymbol,
	Symbol,
)
from diagnames.core.types_core import AggregateType, CType, TypeParameterType
from diagnames.render.names import NameRenderer


def namespace(parent: NamespaceSymbol, dotted: str) -> NamespaceSymbol:
	"""Create the namespace chain `dotted` under `parent`, returning the innermost."""
	ns = parent
	for part in dotted.split("."):
		ns = NamespaceSymbol(name=part, parent=ns)
	return ns


def aggregate(
	parent: Symbol,
	name: str,
	type_params: Sequence[str] = (),
	agg_kind: AggKind = AggKind.CLASS,
	is_bogus: bool = False,
) -> AggregateSymbol:
	"""Declare a type; its parameters are numbered after the enclosing types' ones."""
	first = len(parent.type_vars_all) if isinstance(parent, AggregateSymbol) else 0
	type_vars = tuple(TypeParameterType(index=first + i, name=n) for i, n in enumerate(type_params))
	return AggregateSymbol(name=name, parent=parent, agg_kind=agg_kind, type_vars=type_vars, is_bogus=is_bogus)


def method_type_params(*names: Optional[str]) -> tuple:
	return tuple(TypeParameterType(index=i, is_method_type_param=True, name=n) for i, n in enumerate(names))


def method(
	parent: AggregateSymbol,
	name: str,
	params: Iterable[CType] = (),
	returns: Optional[CType] = None,
	type_params: Sequence[str] = (),
	**flags: object,
) -> MethodSymbol:
	return MethodSymbol(
		name=name,
		parent=parent,
		params=tuple(params),
		return_type=returns,
		type_vars=method_type_params(*type_params),
		**flags,
	)


def inst(agg: AggregateSymbol, *args: CType, outer: Optional[AggregateType] = None) -> AggregateType:
	"""`agg<args...>`; a nested type defaults to its uninstantiated outer type."""
	if outer is None and agg.outer_aggregate() is not None:
		outer = agg.outer_aggregate().this_type()
	return AggregateType(aggregate=agg, type_args=args, outer_type=outer)


@dataclass
class Corlib:
	"""A tiny `System` namespace with the predefined types tests lean on."""

	root: NamespaceSymbol
	system: NamespaceSymbol
	int32: AggregateSymbol
	string: AggregateSymbol
	obj: AggregateSymbol
	boolean: AggregateSymbol
	globals: GlobalSymbols

	@property
	def int_t(self) -> AggregateType:
		return inst(self.int32)

	@property
	def string_t(self) -> AggregateType:
		return inst(self.string)

	@property
	def object_t(self) -> AggregateType:
		return inst(self.obj)

	@property
	def bool_t(self) -> AggregateType:
		return inst(self.boolean)

	def renderer(self) -> NameRenderer:
		return NameRenderer(self.globals)


def make_corlib() -> Corlib:
	root = NamespaceSymbol(name=None)
	system = namespace(root, "System")
	return Corlib(
		root=root,
		system=system,
		int32=aggregate(system, "Int32", agg_kind=AggKind.STRUCT),
		string=aggregate(system, "String"),
		obj=aggregate(system, "Object"),
		boolean=aggregate(system, "Boolean", agg_kind=AggKind.STRUCT),
		globals=GlobalSymbols(root_ns=root),
	)


__all__ = [
	"namespace",
	"aggregate",
	"method_type_params",
	"method",
	"inst",
	"Corlib",
	"make_corlib",
]
