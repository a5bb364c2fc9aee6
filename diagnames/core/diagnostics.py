# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Error types and the diagnostic record used by the driver.

`RenderError` is the fatal tier: it means the symbol graph or the caller broke
an invariant (unknown kind, session misuse, malformed error type). It derives
from AssertionError because it always signals a bug upstream, never a
condition to recover from.
"""

from __future__ import annotations

from dataclasses import dataclass, field


class RenderError(AssertionError):
	"""Fatal invariant violation while rendering a name."""


@dataclass
class Diagnostic:
	"""Represents a driver diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	# Which step produced it: "config", "load", "render".
	phase: str | None = None
	severity: str = "error"
	notes: list[str] = field(default_factory=list)

	def to_json(self) -> dict:
		return {
			"phase": self.phase,
			"code": self.code,
			"message": self.message,
			"severity": self.severity,
			"notes": list(self.notes),
		}

	def format_human(self) -> str:
		prefix = f"{self.severity}"
		if self.phase:
			prefix += f"[{self.phase}]"
		if self.code:
			prefix += f" {self.code}"
		parts = [f"{prefix}: {self.message}"]
		parts.extend(f"  note: {note}" for note in self.notes)
		return "\n".join(parts)


__all__ = ["RenderError", "Diagnostic"]
