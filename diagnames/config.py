# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Renderer configuration: message overrides and nice names.

Config files are JSON objects:

  {
    "messages": {"GLOBAL_NAMESPACE": "<global>", "NULL": "null"},
    "nice_names": {"System.Guid": "Guid"},
    "replace_nice_names": false
  }

`messages` keys are `MessageId` member names. `nice_names` extends the
built-in keyword table unless `replace_nice_names` is true.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping

from diagnames.core.global_symbols import GlobalSymbols
from diagnames.core.messages import DEFAULT_NICE_NAMES, MessageCatalog, MessageId, NiceNames
from diagnames.core.symbols import NamespaceSymbol

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
	"""Malformed renderer configuration."""


@dataclass
class RenderConfig:
	messages: Dict[MessageId, str] = field(default_factory=dict)
	nice_names: Dict[str, str] = field(default_factory=dict)
	replace_nice_names: bool = False

	@classmethod
	def from_dict(cls, obj: Mapping[str, Any]) -> "RenderConfig":
		if not isinstance(obj, Mapping):
			raise ConfigError("config must be a JSON object")
		unknown = set(obj) - {"messages", "nice_names", "replace_nice_names"}
		if unknown:
			raise ConfigError(f"unknown config keys: {', '.join(sorted(unknown))}")

		messages: Dict[MessageId, str] = {}
		raw_messages = obj.get("messages", {})
		if not isinstance(raw_messages, Mapping):
			raise ConfigError("'messages' must be an object")
		for key, text in raw_messages.items():
			try:
				msg_id = MessageId[key]
			except KeyError:
				raise ConfigError(f"unknown message id: {key!r}") from None
			if not isinstance(text, str):
				raise ConfigError(f"message {key!r} must be a string")
			messages[msg_id] = text

		raw_nice = obj.get("nice_names", {})
		if not isinstance(raw_nice, Mapping) or not all(isinstance(v, str) for v in raw_nice.values()):
			raise ConfigError("'nice_names' must map declaration names to strings")

		replace = obj.get("replace_nice_names", False)
		if not isinstance(replace, bool):
			raise ConfigError("'replace_nice_names' must be a boolean")
		return cls(messages=messages, nice_names=dict(raw_nice), replace_nice_names=replace)

	def build_globals(self, root_ns: NamespaceSymbol) -> GlobalSymbols:
		names: Dict[str, str] = {} if self.replace_nice_names else dict(DEFAULT_NICE_NAMES)
		names.update(self.nice_names)
		return GlobalSymbols(
			root_ns=root_ns,
			messages=MessageCatalog(self.messages),
			nice_names=NiceNames(names),
		)


def load_config(path: Path) -> RenderConfig:
	"""Read a `RenderConfig` from a JSON file."""
	try:
		obj = json.loads(Path(path).read_text(encoding="utf-8"))
	except OSError as err:
		raise ConfigError(f"cannot read config {path}: {err}") from err
	except json.JSONDecodeError as err:
		raise ConfigError(f"config {path} is not valid JSON: {err}") from err
	cfg = RenderConfig.from_dict(obj)
	logger.debug(
		"loaded config %s: %d message overrides, %d nice names",
		path,
		len(cfg.messages),
		len(cfg.nice_names),
	)
	return cfg


__all__ = ["ConfigError", "RenderConfig", "load_config"]
