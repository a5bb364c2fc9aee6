"""
diagnames.render: turning resolved symbols and types into diagnostic text.

Modules:
  - session: RenderSession (begin/append/end buffer)
  - names: NameRenderer (symbol and type renderers)
  - err_args: ErrArg variants and ArgFormatter
"""

__all__ = ["session", "names", "err_args"]
