# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Text accumulator for one top-level render request.

A session is opened with `begin()`, appended to during the whole recursive
descent, and closed with `end()`, which hands back the text. Opening an open
session or closing a closed one is a caller bug and raises `RenderError`.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from diagnames.core.diagnostics import RenderError

logger = logging.getLogger(__name__)


class RenderSession:
	def __init__(self) -> None:
		self._parts: Optional[List[str]] = None

	@property
	def is_open(self) -> bool:
		return self._parts is not None

	def begin(self) -> None:
		if self._parts is not None:
			raise RenderError("render session already in progress")
		self._parts = []

	def append(self, text: str) -> None:
		if self._parts is None:
			raise RenderError("append outside of a render session")
		self._parts.append(text)

	def end(self) -> str:
		if self._parts is None:
			raise RenderError("render session was never started")
		text = "".join(self._parts)
		self._parts = None
		return text

	def discard(self) -> None:
		"""Drop a half-built buffer after a fatal error."""
		parts, self._parts = self._parts, None
		if parts is not None:
			logger.debug("discarding partial render: %r", parts)


__all__ = ["RenderSession"]
