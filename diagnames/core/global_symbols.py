# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Process-wide inputs the renderer needs besides the graph itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from diagnames.core.messages import MessageCatalog, NiceNames
from diagnames.core.symbols import NamespaceSymbol


@dataclass
class GlobalSymbols:
	"""Root namespace of the graph plus the message catalog and nice-name table."""

	root_ns: NamespaceSymbol
	messages: MessageCatalog = field(default_factory=MessageCatalog)
	nice_names: NiceNames = field(default_factory=NiceNames)


__all__ = ["GlobalSymbols"]
