# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from diagnames.core.messages import MessageCatalog, MessageId, NiceNames, qualified_decl_name
from diagnames.core.types_core import ArrayType, PointerType
from diagnames.test_support import aggregate, inst, make_corlib, method, namespace


def test_type_vars_all_includes_enclosing_parameters():
	lib = make_corlib()
	outer = aggregate(lib.system, "Outer", ["K", "V"])
	inner = aggregate(outer, "Inner", ["T"])
	assert [tv.name for tv in inner.type_vars_all] == ["K", "V", "T"]
	assert inner.type_vars[0].index == 2


def test_this_type_of_nested_aggregate_carries_outer_instantiation():
	lib = make_corlib()
	outer = aggregate(lib.system, "Outer", ["T"])
	inner = aggregate(outer, "Inner")
	this = inner.this_type()
	assert this.aggregate is inner
	assert this.type_args == ()
	assert this.outer_type == outer.this_type()


def test_bogus_state_is_computed_from_signature_and_cached():
	lib = make_corlib()
	missing = aggregate(lib.system, "Missing", is_bogus=True)
	good = method(lib.obj, "Good", [lib.int_t], returns=lib.string_t)
	bad = method(lib.obj, "Bad", [ArrayType(PointerType(inst(missing)))])
	assert good.compute_current_bogus_state() is False
	assert bad.compute_current_bogus_state() is True
	# Memoized: later graph edits do not change the answer.
	bad.params = ()
	assert bad.compute_current_bogus_state() is True


def test_bogus_return_type_marks_signature():
	lib = make_corlib()
	missing = aggregate(lib.system, "Missing", is_bogus=True)
	meth = method(lib.obj, "Get", returns=inst(missing))
	assert meth.compute_current_bogus_state() is True


def test_qualified_decl_name_skips_root():
	lib = make_corlib()
	generic = namespace(lib.system, "Collections.Generic")
	lst = aggregate(generic, "List", ["T"])
	nested = aggregate(lst, "Enumerator")
	assert qualified_decl_name(lib.int32) == "System.Int32"
	assert qualified_decl_name(nested) == "System.Collections.Generic.List.Enumerator"


def test_nice_names_default_and_custom_tables():
	lib = make_corlib()
	assert NiceNames().lookup(lib.int32) == "int"
	assert NiceNames().lookup(lib.obj) == "object"
	custom = NiceNames({"System.Int32": "Int"})
	assert custom.lookup(lib.int32) == "Int"
	assert custom.lookup(lib.string) is None
	assert NiceNames({}).lookup(lib.int32) is None
	assert len(custom) == 1


def test_message_catalog_overrides():
	assert MessageCatalog().get(MessageId.GLOBAL_NAMESPACE) == "<global namespace>"
	cat = MessageCatalog({MessageId.NULL: "null"})
	assert cat.get(MessageId.NULL) == "null"
	assert cat.get(MessageId.ERRORSYM) == "<error>"
