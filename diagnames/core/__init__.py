"""
diagnames.core: the symbol/type graph model and the tables name rendering reads.

Modules:
  - types_core: type nodes (TypeKind, CType variants, TypeArray)
  - symbols: declaration nodes (SymbolKind, Symbol variants)
  - type_subst: SubstContext and substitution
  - operators: operator method names and display text
  - messages: MessageId catalog and nice names
  - global_symbols: root namespace + catalog bundle
  - diagnostics: RenderError and Diagnostic
"""

__all__ = [
	"types_core",
	"symbols",
	"type_subst",
	"operators",
	"messages",
	"global_symbols",
	"diagnostics",
]
