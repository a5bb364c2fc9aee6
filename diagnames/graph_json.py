# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Build a symbol graph from a structured JSON document.

This is how the driver (and tests) obtain a graph without an analyzer. Nothing
here parses type syntax: every type is either a plain name looked up in scope
or a JSON object spelling out its shape.

Document shape:

  {
    "declarations": [
      {"kind": "namespace", "name": "System", "members": [
        {"kind": "struct", "name": "Int32"},
        {"kind": "class", "name": "List", "type_params": ["T"], "members": [
          {"kind": "method", "name": "Add", "params": ["T"], "returns": {"special": "void"}},
          {"kind": "property", "name": "$Item$", "indexer": true, "params": ["System.Int32"], "getter": true}
        ]}
      ]}
    ],
    "render": [
      {"symbol": "System.List.Add", "on": {"type": "System.List", "args": ["System.Int32"]}},
      {"type": {"array": "System.Int32", "rank": 2}}
    ]
  }

Declarations are addressed by dotted path (`System.List.Add`); the first
overload wins a path, and any declaration may carry an explicit `"id"`.
Accessors are addressed as `<property>.get`, `<event>.add`, etc.

Type objects:
  "Name" / "Ns.Name"                 type parameter in scope, else aggregate path
  {"type": path, "args": [...], "outer": T}
  {"array": T, "rank": n, "vector": bool}
  {"pointer": T} {"nullable": T} {"ref": T} {"out": T}
  {"param": n, "method": bool, "name": str?}
  {"error": name, "namespace": path | "parent": T, "args": [...]}   ({"error": null} is `<error>`)
  {"special": "null" | "void" | "anonymous_method" | "lambda" | "method_group" | "arglist" | "placeholder"}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from diagnames.core.symbols import (
	CTOR_INTERNAL_NAME,
	DTOR_INTERNAL_NAME,
	AggKind,
	AggregateSymbol,
	EventSymbol,
	FieldSymbol,
	MethodSymbol,
	NamespaceSymbol,
	PropertySymbol,
	Symbol,
	SymWithType,
	TypeParameterSymbol,
)
from diagnames.core.type_subst import SubstContext
from diagnames.core.types_core import (
	AggregateType,
	ArgumentListType,
	ArrayType,
	BoundLambdaType,
	CType,
	ErrorType,
	MethodGroupType,
	NullableType,
	NullType,
	OpenTypePlaceholderType,
	ParameterModifierType,
	PointerType,
	TypeParameterType,
	UnboundLambdaType,
	VoidType,
)

logger = logging.getLogger(__name__)

Scope = Dict[str, TypeParameterType]


class GraphDocumentError(ValueError):
	"""Malformed graph document."""


_AGG_KINDS: Mapping[str, AggKind] = {
	"class": AggKind.CLASS,
	"struct": AggKind.STRUCT,
	"interface": AggKind.INTERFACE,
	"enum": AggKind.ENUM,
}

_SPECIAL_TYPES: Mapping[str, Callable[[], CType]] = {
	"null": NullType,
	"void": VoidType,
	"anonymous_method": BoundLambdaType,
	"lambda": UnboundLambdaType,
	"method_group": MethodGroupType,
	"arglist": ArgumentListType,
	"placeholder": OpenTypePlaceholderType,
}


@dataclass
class RenderRequest:
	"""One entry of the document's `render` list, resolved."""

	label: str
	symbol: Optional[Symbol] = None
	type: Optional[CType] = None
	ctx: Optional[SubstContext] = None
	args: bool = True


@dataclass
class GraphDocument:
	root: NamespaceSymbol
	symbols: Dict[str, Symbol] = field(default_factory=dict)
	requests: List[RenderRequest] = field(default_factory=list)

	def lookup(self, path: str) -> Symbol:
		try:
			return self.symbols[path]
		except KeyError:
			raise GraphDocumentError(f"unknown symbol: {path!r}") from None


class _GraphBuilder:
	def __init__(self) -> None:
		self.doc = GraphDocument(root=NamespaceSymbol(name=None))
		# Type references are resolved once every declaration exists.
		self._pending: List[Callable[[], None]] = []

	# Declarations

	def declare_all(self, decls: Any) -> None:
		for decl in _as_list(decls, "declarations"):
			self._declare(decl, self.doc.root, "", {})
		for resolve in self._pending:
			resolve()
		self._pending.clear()

	def _register(self, path: str, sym: Symbol, decl: Mapping[str, Any]) -> None:
		self.doc.symbols.setdefault(path, sym)
		ident = decl.get("id")
		if ident is not None:
			ident = _check_str(ident, "id")
			if ident in self.doc.symbols and self.doc.symbols[ident] is not sym:
				raise GraphDocumentError(f"duplicate id: {ident!r}")
			self.doc.symbols[ident] = sym

	def _declare(self, decl: Any, parent: Symbol, prefix: str, scope: Scope) -> None:
		if not isinstance(decl, Mapping):
			raise GraphDocumentError(f"declaration must be an object, got {decl!r}")
		kind = decl.get("kind")
		if not isinstance(kind, str):
			raise GraphDocumentError(f"declaration kind must be a string, got {kind!r}")
		if kind == "namespace":
			if not isinstance(parent, NamespaceSymbol):
				raise GraphDocumentError("namespaces may only nest in namespaces")
			name = _req_str(decl, "name")
			path = _join(prefix, name)
			ns = NamespaceSymbol(name=name, parent=parent)
			self._register(path, ns, decl)
			for member in _as_list(decl.get("members", []), "members"):
				self._declare(member, ns, path, scope)
		elif kind in _AGG_KINDS:
			self._declare_aggregate(decl, parent, prefix, scope)
		elif kind in ("method", "property", "field", "event"):
			if not isinstance(parent, AggregateSymbol):
				raise GraphDocumentError(f"{kind} {decl.get('name')!r} must be declared inside a type")
			if kind == "method":
				self._declare_method(decl, parent, prefix, scope)
			elif kind == "property":
				self._declare_property(decl, parent, prefix, scope)
			elif kind == "field":
				name = _req_str(decl, "name")
				self._register(_join(prefix, name), FieldSymbol(name=name, parent=parent), decl)
			else:
				self._declare_event(decl, parent, prefix)
		else:
			raise GraphDocumentError(f"unknown declaration kind: {kind!r}")

	def _declare_aggregate(self, decl: Mapping[str, Any], parent: Symbol, prefix: str, scope: Scope) -> None:
		name = _req_str(decl, "name")
		path = _join(prefix, name)
		first = len(parent.type_vars_all) if isinstance(parent, AggregateSymbol) else 0
		names = [_check_str(n, "type_params") for n in _as_list(decl.get("type_params", []), "type_params")]
		type_vars = tuple(TypeParameterType(index=first + i, name=n) for i, n in enumerate(names))
		agg = AggregateSymbol(
			name=name,
			parent=parent,
			agg_kind=_AGG_KINDS[decl["kind"]],
			type_vars=type_vars,
			is_bogus=bool(decl.get("bogus", False)),
		)
		self._register(path, agg, decl)
		inner_scope = dict(scope)
		for tv in type_vars:
			inner_scope[tv.name] = tv
			self.doc.symbols.setdefault(_join(path, tv.name), TypeParameterSymbol(name=tv.name, parent=agg, index=tv.index))
		for member in _as_list(decl.get("members", []), "members"):
			self._declare(member, agg, path, inner_scope)

	def _declare_method(self, decl: Mapping[str, Any], parent: AggregateSymbol, prefix: str, scope: Scope) -> None:
		conversion = decl.get("conversion")
		if conversion not in (None, "implicit", "explicit"):
			raise GraphDocumentError(f"conversion must be 'implicit' or 'explicit', got {conversion!r}")
		is_ctor = bool(decl.get("constructor", False))
		is_dtor = bool(decl.get("destructor", False))
		if is_ctor:
			default_name = CTOR_INTERNAL_NAME
		elif is_dtor:
			default_name = DTOR_INTERNAL_NAME
		elif conversion is not None:
			default_name = "op_Implicit" if conversion == "implicit" else "op_Explicit"
		else:
			default_name = None
		name = decl.get("name", default_name)
		if not isinstance(name, str):
			raise GraphDocumentError(f"method declaration needs a name: {dict(decl)!r}")
		names = [_check_str(n, "type_params") for n in _as_list(decl.get("type_params", []), "type_params")]
		type_vars = tuple(TypeParameterType(index=i, is_method_type_param=True, name=n) for i, n in enumerate(names))
		meth = MethodSymbol(
			name=name,
			parent=parent,
			type_vars=type_vars,
			is_constructor=is_ctor,
			is_destructor=is_dtor,
			is_conversion_operator=conversion is not None,
			is_implicit=conversion == "implicit",
			is_operator=bool(decl.get("operator", conversion is not None)),
			is_varargs=bool(decl.get("varargs", False)),
			is_param_array=bool(decl.get("param_array", False)),
		)
		self._register(_join(prefix, name), meth, decl)
		method_scope = dict(scope)
		for tv in type_vars:
			method_scope[tv.name] = tv

		def resolve() -> None:
			meth.params = tuple(self.resolve_type(p, method_scope) for p in _as_list(decl.get("params", []), "params"))
			if "returns" in decl:
				meth.return_type = self.resolve_type(decl["returns"], method_scope)
			self._resolve_explicit_impl(meth, decl, method_scope)

		self._pending.append(resolve)

	def _declare_property(self, decl: Mapping[str, Any], parent: AggregateSymbol, prefix: str, scope: Scope) -> None:
		name = _req_str(decl, "name")
		path = _join(prefix, name)
		prop = PropertySymbol(
			name=name,
			parent=parent,
			is_indexer=bool(decl.get("indexer", False)),
			is_param_array=bool(decl.get("param_array", False)),
		)
		self._register(path, prop, decl)
		if decl.get("getter", False):
			prop.getter = MethodSymbol(name=f"get_{name}", parent=parent, owner_property=prop)
			self.doc.symbols.setdefault(_join(path, "get"), prop.getter)
		if decl.get("setter", False):
			prop.setter = MethodSymbol(name=f"set_{name}", parent=parent, owner_property=prop)
			self.doc.symbols.setdefault(_join(path, "set"), prop.setter)

		def resolve() -> None:
			prop.params = tuple(self.resolve_type(p, scope) for p in _as_list(decl.get("params", []), "params"))
			self._resolve_explicit_impl(prop, decl, scope)

		self._pending.append(resolve)

	def _declare_event(self, decl: Mapping[str, Any], parent: AggregateSymbol, prefix: str) -> None:
		name = _req_str(decl, "name")
		path = _join(prefix, name)
		event = EventSymbol(name=name, parent=parent)
		self._register(path, event, decl)
		if decl.get("accessors", True):
			event.adder = MethodSymbol(name=f"add_{name}", parent=parent, owner_event=event)
			event.remover = MethodSymbol(name=f"remove_{name}", parent=parent, owner_event=event)
			self.doc.symbols.setdefault(_join(path, "add"), event.adder)
			self.doc.symbols.setdefault(_join(path, "remove"), event.remover)

	def _resolve_explicit_impl(self, member: Any, decl: Mapping[str, Any], scope: Scope) -> None:
		slot = decl.get("explicit_impl")
		if slot is not None:
			if not isinstance(slot, Mapping):
				raise GraphDocumentError("explicit_impl must be an object with 'member' and 'type'")
			ats = self.resolve_type(slot.get("type"), scope)
			if not isinstance(ats, AggregateType):
				raise GraphDocumentError("explicit_impl type must be an interface type")
			member.is_explicit_impl = True
			member.explicit_impl = SymWithType(sym=self.doc.lookup(_req_str(slot, "member")), ats=ats)
		elif "explicit_impl_error" in decl:
			member.is_explicit_impl = True
			text = decl["explicit_impl_error"]
			if text is not None:
				member.err_explicit_impl = ErrorType(ns_parent=self.doc.root, name_text=_check_str(text, "explicit_impl_error"), type_args=())

	# Types

	def resolve_type(self, obj: Any, scope: Scope) -> CType:
		if isinstance(obj, str):
			if obj in scope:
				return scope[obj]
			sym = self.doc.symbols.get(obj)
			if isinstance(sym, AggregateSymbol):
				return self._instantiate(sym, (), None)
			raise GraphDocumentError(f"unknown type name: {obj!r}")
		if not isinstance(obj, Mapping):
			raise GraphDocumentError(f"type must be a name or an object, got {obj!r}")

		if "type" in obj:
			sym = self.doc.lookup(_req_str(obj, "type"))
			if not isinstance(sym, AggregateSymbol):
				raise GraphDocumentError(f"{obj['type']!r} is not a type")
			args = tuple(self.resolve_type(a, scope) for a in _as_list(obj.get("args", []), "args"))
			outer = None
			if "outer" in obj:
				outer = self.resolve_type(obj["outer"], scope)
				if not isinstance(outer, AggregateType):
					raise GraphDocumentError("'outer' must be an aggregate type")
			return self._instantiate(sym, args, outer)
		if "array" in obj:
			rank = obj.get("rank", 1)
			if not isinstance(rank, int) or rank < 1:
				raise GraphDocumentError(f"array rank must be a positive integer, got {rank!r}")
			return ArrayType(self.resolve_type(obj["array"], scope), rank=rank, is_sz_array=bool(obj.get("vector", rank == 1)))
		if "pointer" in obj:
			return PointerType(self.resolve_type(obj["pointer"], scope))
		if "nullable" in obj:
			return NullableType(self.resolve_type(obj["nullable"], scope))
		if "ref" in obj:
			return ParameterModifierType(self.resolve_type(obj["ref"], scope), is_out=False)
		if "out" in obj:
			return ParameterModifierType(self.resolve_type(obj["out"], scope), is_out=True)
		if "param" in obj:
			index = obj["param"]
			if not isinstance(index, int) or index < 0:
				raise GraphDocumentError(f"type parameter index must be a non-negative integer, got {index!r}")
			name = obj.get("name")
			if name is not None:
				name = _check_str(name, "name")
			return TypeParameterType(index=index, is_method_type_param=bool(obj.get("method", False)), name=name)
		if "error" in obj:
			return self._error_type(obj, scope)
		if "special" in obj:
			make = _SPECIAL_TYPES.get(_check_str(obj["special"], "special"))
			if make is None:
				raise GraphDocumentError(f"unknown special type: {obj['special']!r}")
			return make()
		raise GraphDocumentError(f"unrecognized type object: {dict(obj)!r}")

	def _instantiate(self, agg: AggregateSymbol, args: tuple, outer: Optional[AggregateType]) -> AggregateType:
		if outer is None and agg.outer_aggregate() is not None:
			outer = agg.outer_aggregate().this_type()
		return AggregateType(aggregate=agg, type_args=args, outer_type=outer)

	def _error_type(self, obj: Mapping[str, Any], scope: Scope) -> ErrorType:
		name = obj["error"]
		if name is None:
			return ErrorType()
		name = _check_str(name, "error")
		args = tuple(self.resolve_type(a, scope) for a in _as_list(obj.get("args", []), "args"))
		if "parent" in obj:
			return ErrorType(type_parent=self.resolve_type(obj["parent"], scope), name_text=name, type_args=args)
		ns: Symbol = self.doc.root
		if "namespace" in obj:
			ns = self.doc.lookup(_req_str(obj, "namespace"))
			if not isinstance(ns, NamespaceSymbol):
				raise GraphDocumentError(f"{obj['namespace']!r} is not a namespace")
		return ErrorType(ns_parent=ns, name_text=name, type_args=args)

	# Requests

	def add_requests(self, requests: Any) -> None:
		for i, req in enumerate(_as_list(requests, "render")):
			if not isinstance(req, Mapping):
				raise GraphDocumentError(f"render entry {i} must be an object")
			self.doc.requests.append(self._request(req))

	def _request(self, req: Mapping[str, Any]) -> RenderRequest:
		ctx = None
		method_args = tuple(self.resolve_type(t, {}) for t in _as_list(req.get("method_type_args", []), "method_type_args"))
		if "on" in req:
			on = self.resolve_type(req["on"], {})
			if not isinstance(on, AggregateType):
				raise GraphDocumentError("'on' must be an aggregate type")
			ctx = SubstContext.from_type(on, method_args)
		elif "type_args" in req or method_args:
			class_args = tuple(self.resolve_type(t, {}) for t in _as_list(req.get("type_args", []), "type_args"))
			ctx = SubstContext(class_types=class_args, method_types=method_args)

		if "symbol" in req:
			path = _req_str(req, "symbol")
			return RenderRequest(label=req.get("label", path), symbol=self.doc.lookup(path), ctx=ctx, args=bool(req.get("args", True)))
		if "type" in req:
			ty = self.resolve_type(req["type"], {})
			label = req.get("label", req["type"] if isinstance(req["type"], str) else "type")
			return RenderRequest(label=label, type=ty, ctx=ctx)
		raise GraphDocumentError("render entry needs 'symbol' or 'type'")


def _join(prefix: str, name: str) -> str:
	return f"{prefix}.{name}" if prefix else name


def _as_list(value: Any, what: str) -> list:
	if not isinstance(value, list):
		raise GraphDocumentError(f"'{what}' must be a list")
	return value


def _check_str(value: Any, what: str) -> str:
	if not isinstance(value, str):
		raise GraphDocumentError(f"'{what}' entries must be strings, got {value!r}")
	return value


def _req_str(obj: Mapping[str, Any], key: str) -> str:
	if key not in obj:
		raise GraphDocumentError(f"missing '{key}' in {dict(obj)!r}")
	return _check_str(obj[key], key)


def build_graph_document(obj: Any) -> GraphDocument:
	"""Build a `GraphDocument` from an already-decoded JSON value."""
	if not isinstance(obj, Mapping):
		raise GraphDocumentError("graph document must be a JSON object")
	builder = _GraphBuilder()
	builder.declare_all(obj.get("declarations", []))
	builder.add_requests(obj.get("render", []))
	logger.debug("graph document: %d symbols, %d render requests", len(builder.doc.symbols), len(builder.doc.requests))
	return builder.doc


def load_graph_document(path: Path) -> GraphDocument:
	try:
		obj = json.loads(Path(path).read_text(encoding="utf-8"))
	except OSError as err:
		raise GraphDocumentError(f"cannot read {path}: {err}") from err
	except json.JSONDecodeError as err:
		raise GraphDocumentError(f"{path} is not valid JSON: {err}") from err
	return build_graph_document(obj)


__all__ = [
	"GraphDocumentError",
	"RenderRequest",
	"GraphDocument",
	"build_graph_document",
	"load_graph_document",
]
