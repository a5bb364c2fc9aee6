# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command-line driver: render the names requested by a graph document.

  python -m diagnames graph.json [--config cfg.json] [--json] [-v]

Without --json, prints one rendered name per request to stdout and
diagnostics to stderr. With --json, prints a single payload:

  {"exit_code": 0, "names": [{"label": ..., "text": ...}], "diagnostics": [...]}
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from diagnames.config import ConfigError, RenderConfig, load_config
from diagnames.core.diagnostics import Diagnostic, RenderError
from diagnames.graph_json import GraphDocumentError, load_graph_document
from diagnames.render.err_args import ArgFormatter, SymArg, TypeArg
from diagnames.render.names import NameRenderer

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1


def _configure_logging(verbosity: int) -> None:
	"""0 -> WARNING, 1 -> INFO, 2+ -> DEBUG on the `diagnames` logger."""
	level = logging.WARNING
	if verbosity == 1:
		level = logging.INFO
	elif verbosity >= 2:
		level = logging.DEBUG
	handler = logging.StreamHandler(sys.stderr)
	handler.setFormatter(logging.Formatter(fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s", datefmt="%H:%M:%S"))
	root = logging.getLogger("diagnames")
	root.setLevel(level)
	# main() may run many times in one process; keep a single handler.
	for old in list(root.handlers):
		root.removeHandler(old)
	root.addHandler(handler)


def _build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="diagnames", description="Render diagnostic display names from a symbol graph document")
	p.add_argument("document", type=Path, help="Path to a graph document (JSON)")
	p.add_argument("--config", type=Path, default=None, help="Renderer config with message overrides and nice names (JSON)")
	p.add_argument("--json", action="store_true", help="Emit a machine-readable JSON payload")
	p.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v info, -vv debug)")
	return p


def _emit(as_json: bool, names: List[dict], diagnostics: List[Diagnostic]) -> int:
	exit_code = EXIT_ERROR if any(d.severity == "error" for d in diagnostics) else EXIT_OK
	if as_json:
		payload = {
			"exit_code": exit_code,
			"names": names,
			"diagnostics": [d.to_json() for d in diagnostics],
		}
		print(json.dumps(payload))
	else:
		for entry in names:
			print(entry["text"])
		for diag in diagnostics:
			print(diag.format_human(), file=sys.stderr)
	return exit_code


def main(argv: list[str] | None = None) -> int:
	args = _build_parser().parse_args(argv)
	_configure_logging(args.verbose)

	try:
		cfg = load_config(args.config) if args.config is not None else RenderConfig()
	except ConfigError as err:
		return _emit(args.json, [], [Diagnostic(message=str(err), phase="config")])
	try:
		doc = load_graph_document(args.document)
	except GraphDocumentError as err:
		return _emit(args.json, [], [Diagnostic(message=str(err), phase="load", notes=[str(args.document)])])

	global_symbols = cfg.build_globals(doc.root)
	formatter = ArgFormatter(global_symbols)
	renderer = NameRenderer(global_symbols)
	names: List[dict] = []
	diagnostics: List[Diagnostic] = []
	for req in doc.requests:
		try:
			if req.symbol is None:
				text = formatter.format(TypeArg(req.type, req.ctx)).text
			elif req.args:
				text = formatter.format(SymArg(req.symbol, req.ctx)).text
			else:
				text = renderer.render_symbol(req.symbol, req.ctx, args=False)
		except RenderError as err:
			logger.info("render of %s failed: %s", req.label, err)
			diagnostics.append(Diagnostic(message=str(err), phase="render", code="E-RENDER", notes=[f"request: {req.label}"]))
			continue
		names.append({"label": req.label, "text": text})
	return _emit(args.json, names, diagnostics)


__all__ = ["main"]
