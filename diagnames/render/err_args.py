# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Diagnostic arguments and their conversion to display text.

A diagnostic template like `'{0}' does not contain a definition for '{1}'` is
filled from a list of tagged arguments. Resolved references (types, symbols,
members on an instantiation) are rendered by `NameRenderer`; the rest are canned
phrases or plain text. `FormattedArg.user_strings` tells the message layer which
of the two it got, so it can quote rendered names and leave phrases alone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from diagnames.core.diagnostics import RenderError
from diagnames.core.global_symbols import GlobalSymbols
from diagnames.core.messages import MessageId
from diagnames.core.symbols import INDEXER_INTERNAL_NAME, MethodSymbol, Symbol, SymbolKind
from diagnames.core.type_subst import SubstContext
from diagnames.core.types_core import EMPTY_TYPES, AggregateType, CType, TypeArray
from diagnames.render.names import NameRenderer

logger = logging.getLogger(__name__)


class ErrArg:
	"""Base class for diagnostic arguments."""


@dataclass(frozen=True)
class IdsArg(ErrArg):
	ids: MessageId


@dataclass(frozen=True)
class SymKindArg(ErrArg):
	sk: SymbolKind


@dataclass(frozen=True)
class TypeArg(ErrArg):
	type: CType
	ctx: Optional[SubstContext] = None


@dataclass(frozen=True)
class SymArg(ErrArg):
	sym: Symbol
	ctx: Optional[SubstContext] = None


@dataclass(frozen=True)
class NameArg(ErrArg):
	name: str


@dataclass(frozen=True)
class StrArg(ErrArg):
	text: str


@dataclass(frozen=True)
class SymWithTypeArg(ErrArg):
	"""A member as seen through an instantiation of its containing type."""

	sym: Symbol
	ats: Optional[AggregateType] = None


@dataclass(frozen=True)
class MethWithInstArg(ErrArg):
	"""A method on an instantiation, with its own type arguments applied too."""

	meth: MethodSymbol
	ats: Optional[AggregateType] = None
	type_args: TypeArray = field(default=EMPTY_TYPES)


@dataclass(frozen=True)
class FormattedArg:
	text: str
	# True when `text` is a rendered name rather than a canned phrase.
	user_strings: bool = False


_SYMKIND_MESSAGES: Mapping[SymbolKind, MessageId] = {
	SymbolKind.METHOD: MessageId.SK_METHOD,
	SymbolKind.AGGREGATE: MessageId.SK_CLASS,
	SymbolKind.NAMESPACE: MessageId.SK_NAMESPACE,
	SymbolKind.FIELD: MessageId.SK_FIELD,
	SymbolKind.LOCAL_VARIABLE: MessageId.SK_VARIABLE,
	SymbolKind.PROPERTY: MessageId.SK_PROPERTY,
	SymbolKind.EVENT: MessageId.SK_EVENT,
	SymbolKind.TYPE_PARAMETER: MessageId.SK_TYVAR,
}


class ArgFormatter:
	"""Converts `ErrArg`s to text. Each resolved reference gets a fresh session."""

	def __init__(self, global_symbols: GlobalSymbols) -> None:
		self._globals = global_symbols

	def symkind_text(self, sk: SymbolKind) -> str:
		msg_id = _SYMKIND_MESSAGES.get(sk)
		if msg_id is None:
			raise RenderError(f"symbol kind {sk} has no display phrase")
		return self._globals.messages.get(msg_id)

	def format(self, arg: ErrArg) -> Optional[FormattedArg]:
		"""
		Return the display text for `arg`.

		Returns None for an argument variant this formatter does not know; the
		caller decides how to degrade.
		"""
		if isinstance(arg, IdsArg):
			return FormattedArg(self._globals.messages.get(arg.ids))
		if isinstance(arg, SymKindArg):
			return FormattedArg(self.symkind_text(arg.sk))
		if isinstance(arg, TypeArg):
			return FormattedArg(self._renderer().render_type(arg.type, arg.ctx), user_strings=True)
		if isinstance(arg, SymArg):
			return FormattedArg(self._renderer().render_symbol(arg.sym, arg.ctx), user_strings=True)
		if isinstance(arg, NameArg):
			return FormattedArg("this" if arg.name == INDEXER_INTERNAL_NAME else arg.name)
		if isinstance(arg, StrArg):
			return FormattedArg(arg.text)
		if isinstance(arg, SymWithTypeArg):
			ctx = SubstContext.from_type(arg.ats)
			return FormattedArg(self._renderer().render_symbol(arg.sym, ctx, True), user_strings=True)
		if isinstance(arg, MethWithInstArg):
			ctx = SubstContext.from_type(arg.ats, arg.type_args)
			return FormattedArg(self._renderer().render_symbol(arg.meth, ctx, True), user_strings=True)
		logger.warning("cannot format diagnostic argument of type %s", type(arg).__name__)
		return None

	def _renderer(self) -> NameRenderer:
		return NameRenderer(self._globals)


__all__ = [
	"ErrArg",
	"IdsArg",
	"SymKindArg",
	"TypeArg",
	"SymArg",
	"NameArg",
	"StrArg",
	"SymWithTypeArg",
	"MethWithInstArg",
	"FormattedArg",
	"ArgFormatter",
]
