# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Qualified display names for symbols and types, as shown in diagnostics.

`NameRenderer` walks the resolved graph and writes into one `RenderSession`
per top-level request. Symbol rendering and type rendering call into each
other: a method's parameter list is made of types, and an aggregate type is
qualified by its parent symbols.

Output grammar, by example:

  System.Collections.Generic.List<int>.Add(int)
  N.C<T>.M<U>(T, params U[])
  N.C.implicit operator int(N.C)
  N.C.P.get
  N.C.this[int]
  int[][*][,,]

Substitution happens exactly once per type subtree: `_append_type` applies the
context to the whole type up front and renders the children without it. A
context is never re-applied to its own output, which keeps recursive generic
instantiations (`class C<T> : IComparable<C<T>>`) finite.
"""

from __future__ import annotations

from typing import Callable, Optional

from diagnames.core.diagnostics import RenderError
from diagnames.core.global_symbols import GlobalSymbols
from diagnames.core.messages import MessageId
from diagnames.core.operators import (
	OP_COMPARE_NAME,
	OP_EQUALS_NAME,
	display_name,
	has_display_name,
	operator_of_method_name,
)
from diagnames.core.symbols import (
	INDEXER_INTERNAL_NAME,
	AggregateSymbol,
	MethodSymbol,
	PropertySymbol,
	Symbol,
	SymbolKind,
	SymWithType,
)
from diagnames.core.type_subst import SubstContext, subst_type, subst_type_array
from diagnames.core.types_core import ArrayType, CType, ErrorType, TypeArray, TypeKind
from diagnames.render.session import RenderSession


class NameRenderer:
	"""
	Renders symbols and types to display text.

	One instance serves one request at a time; it is not thread-safe.
	"""

	def __init__(self, global_symbols: GlobalSymbols) -> None:
		self._globals = global_symbols
		self._out = RenderSession()

	@property
	def session(self) -> RenderSession:
		return self._out

	def render_symbol(self, sym: Symbol, ctx: Optional[SubstContext] = None, args: bool = True) -> str:
		"""Render `sym`; `args` controls a method's `(...)` parameter list."""
		return self._render(lambda: self._append_sym(sym, ctx, args))

	def render_type(self, ty: CType, ctx: Optional[SubstContext] = None) -> str:
		return self._render(lambda: self._append_type(ty, ctx))

	def _render(self, body: Callable[[], None]) -> str:
		self._out.begin()
		try:
			body()
			return self._out.end()
		except BaseException:
			self._out.discard()
			raise

	# Leaf appenders

	def _append_name(self, name: Optional[str]) -> None:
		if name == INDEXER_INTERNAL_NAME:
			self._out.append("this")
		else:
			self._out.append(name or "")

	def _append_id(self, msg_id: MessageId) -> None:
		self._out.append(self._globals.messages.get(msg_id))

	def _append_type_param_ref(self, name: Optional[str], index: int, is_method_type_param: bool) -> None:
		if name is None:
			# Synthetic parameter: `!n` for a type's, `!!n` for a method's.
			self._out.append("!!" if is_method_type_param else "!")
			self._out.append(str(index))
		else:
			self._append_name(name)

	def _append_param_list(self, params: TypeArray, is_varargs: bool, is_param_array: bool) -> None:
		"""Parameter types joined by `, `; does not include the brackets."""
		last = len(params) - 1
		for i, param in enumerate(params):
			if i > 0:
				self._out.append(", ")
			if is_param_array and i == last:
				self._out.append("params ")
			self._append_type(param, None)
		if is_varargs:
			if params:
				self._out.append(", ")
			self._out.append("...")

	def _append_type_parameters(self, params: TypeArray, ctx: Optional[SubstContext]) -> None:
		if not params:
			return
		self._out.append("<")
		for i, param in enumerate(params):
			if i > 0:
				self._out.append(",")
			self._append_type(param, ctx)
		self._out.append(">")

	# Parent qualification

	def _append_parent_sym(self, sym: Symbol, ctx: Optional[SubstContext]) -> None:
		self._append_parent_core(sym.parent, ctx)

	def _append_parent_core(self, parent: Optional[Symbol], ctx: Optional[SubstContext]) -> None:
		if parent is None or parent is self._globals.root_ns:
			return
		if (
			ctx is not None
			and not ctx.is_nop()
			and isinstance(parent, AggregateSymbol)
			and parent.type_vars_all
		):
			# Show the enclosing type as instantiated by the context.
			self._append_type(subst_type(parent.this_type(), ctx), None)
		else:
			self._append_sym(parent, None)
		self._out.append(".")

	def _slot_context(self, slot: SymWithType, ctx: Optional[SubstContext]) -> SubstContext:
		ats = slot.ats
		if ats is not None:
			ats = subst_type(ats, ctx)
		return SubstContext.from_type(ats)

	# Symbols

	def _append_sym(self, sym: Symbol, ctx: Optional[SubstContext], args: bool = True) -> None:
		kind = getattr(sym, "kind", None)
		if kind is SymbolKind.AGGREGATE:
			nice = self._globals.nice_names.lookup(sym)
			if nice is not None:
				self._out.append(nice)
				return
			self._append_parent_sym(sym, ctx)
			self._append_name(sym.name)
			self._append_type_parameters(sym.type_vars, ctx)
		elif kind is SymbolKind.METHOD:
			self._append_method(sym, ctx, args)
		elif kind is SymbolKind.PROPERTY:
			self._append_property(sym, ctx)
		elif kind is SymbolKind.EVENT:
			# Events have no display form yet.
			pass
		elif kind is SymbolKind.NAMESPACE:
			if sym is self._globals.root_ns:
				self._append_id(MessageId.GLOBAL_NAMESPACE)
			else:
				self._append_parent_sym(sym, None)
				self._append_name(sym.name)
		elif kind is SymbolKind.FIELD:
			self._append_parent_sym(sym, ctx)
			self._append_name(sym.name)
		elif kind is SymbolKind.TYPE_PARAMETER:
			self._append_type_param_ref(sym.name, sym.index, sym.is_method_type_param)
		elif kind is SymbolKind.LOCAL_VARIABLE:
			self._append_name(sym.name)
		else:
			raise RenderError(f"bad symbol kind: {kind}")

	def _append_method(self, meth: MethodSymbol, ctx: Optional[SubstContext], args: bool) -> None:
		if meth.is_explicit_impl and meth.explicit_impl:
			self._append_parent_sym(meth, ctx)
			# Name, type args and parameter list all come from the interface member.
			self._append_sym(meth.explicit_impl.sym, self._slot_context(meth.explicit_impl, ctx), args)
			return

		if meth.is_property_accessor():
			prop = meth.owner_property
			self._append_sym(prop, ctx)
			if prop.getter is meth:
				self._out.append(".get")
			elif prop.setter is meth:
				self._out.append(".set")
			else:
				raise RenderError(f"accessor {meth.name!r} is neither getter nor setter of {prop.name!r}")
			return

		if meth.is_event_accessor():
			event = meth.owner_event
			self._append_sym(event, ctx)
			if event.adder is meth:
				self._out.append(".add")
			elif event.remover is meth:
				self._out.append(".remove")
			else:
				raise RenderError(f"accessor {meth.name!r} is neither adder nor remover of {event.name!r}")
			return

		self._append_parent_sym(meth, ctx)
		if meth.is_constructor:
			# The class name, not `.ctor`.
			self._append_name(meth.get_class().name)
		elif meth.is_destructor:
			self._out.append("~")
			self._append_name(meth.get_class().name)
		elif meth.is_conversion_operator:
			if meth.return_type is None:
				raise RenderError(f"conversion operator {meth.name!r} has no return type")
			self._out.append("implicit" if meth.is_implicit else "explicit")
			self._out.append(" operator ")
			self._append_type(meth.return_type, ctx)
		elif meth.is_operator:
			self._out.append("operator ")
			self._out.append(self._operator_text(meth.name))
		elif meth.is_explicit_impl:
			if meth.err_explicit_impl is not None:
				self._append_type(meth.err_explicit_impl, ctx)
		else:
			self._append_name(meth.name)

		self._append_type_parameters(meth.type_vars, ctx)

		if args:
			self._out.append("(")
			if not meth.compute_current_bogus_state():
				self._append_param_list(subst_type_array(meth.params, ctx), meth.is_varargs, meth.is_param_array)
			self._out.append(")")

	def _operator_text(self, method_name: Optional[str]) -> str:
		op = operator_of_method_name(method_name)
		if has_display_name(op):
			return display_name(op)
		if method_name == OP_EQUALS_NAME:
			return "equals"
		if method_name == OP_COMPARE_NAME:
			return "compare"
		raise RenderError(f"unknown operator method name: {method_name!r}")

	def _append_indexer(self, prop: PropertySymbol, ctx: Optional[SubstContext]) -> None:
		self._out.append("this[")
		self._append_param_list(subst_type_array(prop.params, ctx), False, prop.is_param_array)
		self._out.append("]")

	def _append_property(self, prop: PropertySymbol, ctx: Optional[SubstContext]) -> None:
		self._append_parent_sym(prop, ctx)
		if prop.is_explicit_impl and prop.explicit_impl:
			self._append_sym(prop.explicit_impl.sym, self._slot_context(prop.explicit_impl, ctx))
		elif prop.is_explicit_impl:
			if prop.err_explicit_impl is not None:
				self._append_type(prop.err_explicit_impl, ctx)
			if prop.is_indexer:
				self._out.append(".")
				self._append_indexer(prop, ctx)
		elif prop.is_indexer:
			self._append_indexer(prop, ctx)
		else:
			self._append_name(prop.name)

	# Types

	def _append_type(self, ty: CType, ctx: Optional[SubstContext]) -> None:
		if ctx is not None:
			if not ctx.is_nop():
				ty = subst_type(ty, ctx)
			# Children are rendered from the substituted tree only.
			ctx = None

		kind = getattr(ty, "kind", None)
		if kind is TypeKind.AGGREGATE:
			nice = self._globals.nice_names.lookup(ty.aggregate)
			if nice is not None:
				self._out.append(nice)
				return
			if ty.outer_type is not None:
				self._append_type(ty.outer_type, None)
				self._out.append(".")
			else:
				self._append_parent_sym(ty.aggregate, None)
			self._append_name(ty.aggregate.name)
			self._append_type_parameters(ty.type_args, None)
		elif kind is TypeKind.TYPE_PARAMETER:
			self._append_type_param_ref(ty.name, ty.index, ty.is_method_type_param)
		elif kind is TypeKind.ERROR:
			self._append_error_type(ty)
		elif kind is TypeKind.NULL:
			self._append_id(MessageId.NULL)
		elif kind is TypeKind.OPEN_PLACEHOLDER:
			pass
		elif kind is TypeKind.BOUND_LAMBDA:
			self._append_id(MessageId.ANON_METHOD)
		elif kind is TypeKind.UNBOUND_LAMBDA:
			self._append_id(MessageId.LAMBDA)
		elif kind is TypeKind.METHOD_GROUP:
			self._append_id(MessageId.METHOD_GROUP)
		elif kind is TypeKind.ARGUMENT_LIST:
			self._append_id(MessageId.ARG_LIST)
		elif kind is TypeKind.VOID:
			self._append_id(MessageId.VOID)
		elif kind is TypeKind.ARRAY:
			self._append_array(ty)
		elif kind is TypeKind.PARAMETER_MODIFIER:
			self._out.append("out " if ty.is_out else "ref ")
			self._append_type(ty.parameter_type, None)
		elif kind is TypeKind.POINTER:
			self._append_type(ty.referent, None)
			self._out.append("*")
		elif kind is TypeKind.NULLABLE:
			self._append_type(ty.underlying, None)
			self._out.append("?")
		else:
			raise RenderError(f"bad type kind: {kind}")

	def _append_error_type(self, ty: ErrorType) -> None:
		if ty.has_parent():
			if ty.name_text is None or ty.type_args is None:
				raise RenderError("error type with a parent must carry a name and type arguments")
			if ty.has_type_parent():
				self._append_type(ty.type_parent, None)
				self._out.append(".")
			else:
				self._append_parent_core(ty.ns_parent, None)
			self._append_name(ty.name_text)
			self._append_type_parameters(ty.type_args, None)
		else:
			if ty.type_args is not None:
				raise RenderError("parentless error type must not carry type arguments")
			self._append_id(MessageId.ERRORSYM)

	def _append_array(self, ty: ArrayType) -> None:
		self._append_type(ty.base_element_type, None)
		# One bracket group per layer, outermost first.
		layer: CType = ty
		while isinstance(layer, ArrayType):
			self._out.append("[")
			if layer.rank == 1:
				if not layer.is_sz_array:
					self._out.append("*")
			else:
				self._out.append("," * (layer.rank - 1))
			self._out.append("]")
			layer = layer.element


__all__ = ["NameRenderer"]
