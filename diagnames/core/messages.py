# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Fixed message identifiers, their default text, and the nice-name table.

The renderer never hard-codes user-visible tokens such as `<global namespace>`
or `lambda expression`: it asks the `MessageCatalog` for them so a localized
catalog can be swapped in. Nice names are the curated short spellings of
well-known built-in declarations (`System.Int32` -> `int`).
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Dict, Mapping, Optional

from diagnames.core.symbols import AggregateSymbol, SymbolKind


class MessageId(Enum):
	"""Closed set of canned phrases used by name rendering."""

	GLOBAL_NAMESPACE = auto()
	ERRORSYM = auto()
	NULL = auto()
	VOID = auto()
	ANON_METHOD = auto()
	LAMBDA = auto()
	METHOD_GROUP = auto()
	ARG_LIST = auto()

	# Symbol-kind phrases ("the method 'X'").
	SK_METHOD = auto()
	SK_CLASS = auto()
	SK_NAMESPACE = auto()
	SK_FIELD = auto()
	SK_VARIABLE = auto()
	SK_PROPERTY = auto()
	SK_EVENT = auto()
	SK_TYVAR = auto()
	SK_UNKNOWN = auto()


DEFAULT_MESSAGES: Mapping[MessageId, str] = {
	MessageId.GLOBAL_NAMESPACE: "<global namespace>",
	MessageId.ERRORSYM: "<error>",
	MessageId.NULL: "<null>",
	MessageId.VOID: "void",
	MessageId.ANON_METHOD: "anonymous method",
	MessageId.LAMBDA: "lambda expression",
	MessageId.METHOD_GROUP: "method group",
	MessageId.ARG_LIST: "__arglist",
	MessageId.SK_METHOD: "method",
	MessageId.SK_CLASS: "type",
	MessageId.SK_NAMESPACE: "namespace",
	MessageId.SK_FIELD: "field",
	MessageId.SK_VARIABLE: "variable",
	MessageId.SK_PROPERTY: "property",
	MessageId.SK_EVENT: "event",
	MessageId.SK_TYVAR: "type parameter",
	MessageId.SK_UNKNOWN: "element",
}


class MessageCatalog:
	"""MessageId -> text lookup; overrides win over the default English text."""

	def __init__(self, overrides: Optional[Mapping[MessageId, str]] = None) -> None:
		self._messages: Dict[MessageId, str] = dict(DEFAULT_MESSAGES)
		if overrides:
			self._messages.update(overrides)

	def get(self, msg_id: MessageId) -> str:
		return self._messages[msg_id]


# Keyword spellings for the predefined types. Keys are fully-qualified
# declaration names as produced by `qualified_decl_name`.
DEFAULT_NICE_NAMES: Mapping[str, str] = {
	"System.Boolean": "bool",
	"System.Byte": "byte",
	"System.SByte": "sbyte",
	"System.Char": "char",
	"System.Decimal": "decimal",
	"System.Double": "double",
	"System.Single": "float",
	"System.Int16": "short",
	"System.UInt16": "ushort",
	"System.Int32": "int",
	"System.UInt32": "uint",
	"System.Int64": "long",
	"System.UInt64": "ulong",
	"System.Object": "object",
	"System.String": "string",
}


def qualified_decl_name(agg: AggregateSymbol) -> str:
	"""
	Return the dotted declaration path of `agg` (`System.Collections.Generic.List`).

	The root namespace contributes nothing; nested aggregates include their
	enclosing aggregates.
	"""
	parts = []
	sym = agg
	while sym is not None:
		if sym.parent is None and sym.kind is SymbolKind.NAMESPACE:
			break
		parts.append(sym.name or "")
		sym = sym.parent
	return ".".join(reversed(parts))


class NiceNames:
	"""Registered nice names for well-known declarations."""

	def __init__(self, names: Optional[Mapping[str, str]] = None) -> None:
		self._names: Dict[str, str] = dict(DEFAULT_NICE_NAMES if names is None else names)

	def lookup(self, agg: AggregateSymbol) -> Optional[str]:
		"""Return the nice name for `agg`, or None when it has none."""
		if not self._names:
			return None
		return self._names.get(qualified_decl_name(agg))

	def __len__(self) -> int:
		return len(self._names)


__all__ = [
	"MessageId",
	"DEFAULT_MESSAGES",
	"MessageCatalog",
	"DEFAULT_NICE_NAMES",
	"qualified_decl_name",
	"NiceNames",
]
