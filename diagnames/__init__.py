# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
diagnames: display names of resolved symbols and types for compiler diagnostics.

The renderer lives in `diagnames.render`; the graph model it reads lives in
`diagnames.core`. The CLI entrypoint is `diagnames.cli:main`.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
