# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Type parameter substitution helpers."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Sequence

from diagnames.core.types_core import (
	EMPTY_TYPES,
	AggregateType,
	ArrayType,
	CType,
	ErrorType,
	NullableType,
	ParameterModifierType,
	PointerType,
	TypeArray,
	TypeParameterType,
)


@dataclass(frozen=True)
class SubstContext:
	"""
	Positional substitution for type parameters.

	`class_types[i]` replaces the type-owned parameter with index `i` and
	`method_types[i]` the method-owned one. Indices beyond the supplied
	arguments are left untouched.
	"""

	class_types: TypeArray = EMPTY_TYPES
	method_types: TypeArray = EMPTY_TYPES

	def __post_init__(self) -> None:
		object.__setattr__(self, "class_types", tuple(self.class_types))
		object.__setattr__(self, "method_types", tuple(self.method_types))

	@classmethod
	def from_type(cls, ats: Optional[AggregateType], method_types: Sequence[CType] = ()) -> "SubstContext":
		"""Context for members found on `ats` (all its type args, outer ones first)."""
		class_types = ats.type_args_all if ats is not None else EMPTY_TYPES
		return cls(class_types=class_types, method_types=method_types)

	def is_nop(self) -> bool:
		return not self.class_types and not self.method_types

	def compose(self, inner: "SubstContext") -> "SubstContext":
		"""
		Return the context equal to applying `inner` first, then `self`.

		Positions `inner` does not cover fall through to `self` unchanged.
		"""
		if inner.is_nop():
			return self
		if self.is_nop():
			return inner
		class_types = subst_type_array(inner.class_types, self) + self.class_types[len(inner.class_types):]
		method_types = subst_type_array(inner.method_types, self) + self.method_types[len(inner.method_types):]
		return SubstContext(class_types=class_types, method_types=method_types)


def subst_type(ty: CType, ctx: Optional[SubstContext]) -> CType:
	"""Apply `ctx` to `ty`, returning `ty` itself when nothing changes."""
	if ctx is None or ctx.is_nop():
		return ty
	if isinstance(ty, TypeParameterType):
		args = ctx.method_types if ty.is_method_type_param else ctx.class_types
		if 0 <= ty.index < len(args):
			return args[ty.index]
		return ty
	if isinstance(ty, AggregateType):
		new_args = subst_type_array(ty.type_args, ctx)
		new_outer = subst_type(ty.outer_type, ctx) if ty.outer_type is not None else None
		if new_args == ty.type_args and new_outer == ty.outer_type:
			return ty
		return AggregateType(aggregate=ty.aggregate, type_args=new_args, outer_type=new_outer)
	if isinstance(ty, ArrayType):
		elem = subst_type(ty.element, ctx)
		return ty if elem == ty.element else replace(ty, element=elem)
	if isinstance(ty, PointerType):
		referent = subst_type(ty.referent, ctx)
		return ty if referent == ty.referent else PointerType(referent)
	if isinstance(ty, NullableType):
		underlying = subst_type(ty.underlying, ctx)
		return ty if underlying == ty.underlying else NullableType(underlying)
	if isinstance(ty, ParameterModifierType):
		inner = subst_type(ty.parameter_type, ctx)
		return ty if inner == ty.parameter_type else replace(ty, parameter_type=inner)
	if isinstance(ty, ErrorType):
		if ty.type_args is None and ty.type_parent is None:
			return ty
		new_parent = subst_type(ty.type_parent, ctx) if ty.type_parent is not None else None
		new_args = subst_type_array(ty.type_args, ctx) if ty.type_args is not None else None
		if new_parent == ty.type_parent and new_args == ty.type_args:
			return ty
		return replace(ty, type_parent=new_parent, type_args=new_args)
	return ty


def subst_type_array(types: TypeArray, ctx: Optional[SubstContext]) -> TypeArray:
	if ctx is None or ctx.is_nop() or not types:
		return types
	return tuple(subst_type(t, ctx) for t in types)


__all__ = ["SubstContext", "subst_type", "subst_type_array"]
