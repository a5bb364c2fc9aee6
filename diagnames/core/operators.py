# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Overloadable operator identities and their display text.

User-defined operators are declared as methods with well-known metadata names
(`op_Addition`, `op_Implicit`, ...). Diagnostics never show those names; they
show `operator +` instead. This module owns the name -> kind -> text mapping.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Dict, Optional


class OperatorKind(Enum):
	"""Overloadable operators recognized by name."""

	NONE = auto()

	# Unary
	UPLUS = auto()
	NEG = auto()
	LOG_NOT = auto()
	BIT_NOT = auto()
	INC = auto()
	DEC = auto()
	TRUE = auto()
	FALSE = auto()

	# Binary
	ADD = auto()
	SUB = auto()
	MUL = auto()
	DIV = auto()
	MOD = auto()
	BIT_AND = auto()
	BIT_OR = auto()
	BIT_XOR = auto()
	LSHIFT = auto()
	RSHIFT = auto()

	# Relational
	EQ = auto()
	NE = auto()
	LT = auto()
	LE = auto()
	GT = auto()
	GE = auto()

	# Conversions
	IMPLICIT = auto()
	EXPLICIT = auto()

	# Operator-like hooks with no symbolic form.
	EQUALS = auto()
	COMPARE = auto()


OP_EQUALS_NAME = "op_Equals"
OP_COMPARE_NAME = "op_Compare"

_METHOD_NAMES: Dict[str, OperatorKind] = {
	"op_UnaryPlus": OperatorKind.UPLUS,
	"op_UnaryNegation": OperatorKind.NEG,
	"op_LogicalNot": OperatorKind.LOG_NOT,
	"op_OnesComplement": OperatorKind.BIT_NOT,
	"op_Increment": OperatorKind.INC,
	"op_Decrement": OperatorKind.DEC,
	"op_True": OperatorKind.TRUE,
	"op_False": OperatorKind.FALSE,
	"op_Addition": OperatorKind.ADD,
	"op_Subtraction": OperatorKind.SUB,
	"op_Multiply": OperatorKind.MUL,
	"op_Division": OperatorKind.DIV,
	"op_Modulus": OperatorKind.MOD,
	"op_BitwiseAnd": OperatorKind.BIT_AND,
	"op_BitwiseOr": OperatorKind.BIT_OR,
	"op_ExclusiveOr": OperatorKind.BIT_XOR,
	"op_LeftShift": OperatorKind.LSHIFT,
	"op_RightShift": OperatorKind.RSHIFT,
	"op_Equality": OperatorKind.EQ,
	"op_Inequality": OperatorKind.NE,
	"op_LessThan": OperatorKind.LT,
	"op_LessThanOrEqual": OperatorKind.LE,
	"op_GreaterThan": OperatorKind.GT,
	"op_GreaterThanOrEqual": OperatorKind.GE,
	"op_Implicit": OperatorKind.IMPLICIT,
	"op_Explicit": OperatorKind.EXPLICIT,
	OP_EQUALS_NAME: OperatorKind.EQUALS,
	OP_COMPARE_NAME: OperatorKind.COMPARE,
}

_DISPLAY_NAMES: Dict[OperatorKind, str] = {
	OperatorKind.UPLUS: "+",
	OperatorKind.NEG: "-",
	OperatorKind.LOG_NOT: "!",
	OperatorKind.BIT_NOT: "~",
	OperatorKind.INC: "++",
	OperatorKind.DEC: "--",
	OperatorKind.TRUE: "true",
	OperatorKind.FALSE: "false",
	OperatorKind.ADD: "+",
	OperatorKind.SUB: "-",
	OperatorKind.MUL: "*",
	OperatorKind.DIV: "/",
	OperatorKind.MOD: "%",
	OperatorKind.BIT_AND: "&",
	OperatorKind.BIT_OR: "|",
	OperatorKind.BIT_XOR: "^",
	OperatorKind.LSHIFT: "<<",
	OperatorKind.RSHIFT: ">>",
	OperatorKind.EQ: "==",
	OperatorKind.NE: "!=",
	OperatorKind.LT: "<",
	OperatorKind.LE: "<=",
	OperatorKind.GT: ">",
	OperatorKind.GE: ">=",
}


def operator_of_method_name(name: Optional[str]) -> OperatorKind:
	"""Map an operator method's metadata name to its kind (NONE if unknown)."""
	if name is None:
		return OperatorKind.NONE
	return _METHOD_NAMES.get(name, OperatorKind.NONE)


def has_display_name(op: OperatorKind) -> bool:
	return op in _DISPLAY_NAMES


def display_name(op: OperatorKind) -> str:
	"""Return the symbolic text for `op`; KeyError if it has none."""
	return _DISPLAY_NAMES[op]


__all__ = [
	"OperatorKind",
	"OP_EQUALS_NAME",
	"OP_COMPARE_NAME",
	"operator_of_method_name",
	"has_display_name",
	"display_name",
]
