# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from diagnames.core.diagnostics import RenderError
from diagnames.core.symbols import (
	AggKind,
	EventSymbol,
	FieldSymbol,
	LocalVariableSymbol,
	MethodSymbol,
	PropertySymbol,
	ScopeSymbol,
	SymWithType,
	TypeParameterSymbol,
)
from diagnames.core.type_subst import SubstContext
from diagnames.core.types_core import ArrayType, ErrorType, ParameterModifierType
from diagnames.test_support import aggregate, inst, make_corlib, method, namespace


@pytest.fixture
def lib():
	return make_corlib()


@pytest.fixture
def foo(lib):
	return aggregate(namespace(lib.root, "N"), "Foo")


@pytest.fixture
def generic(lib):
	return namespace(lib.system, "Collections.Generic")


def test_namespaces(lib, generic):
	r = lib.renderer()
	assert r.render_symbol(lib.root) == "<global namespace>"
	assert r.render_symbol(generic) == "System.Collections.Generic"


def test_aggregate_symbols(lib, generic):
	lst = aggregate(generic, "List", ["T"])
	r = lib.renderer()
	assert r.render_symbol(lst) == "System.Collections.Generic.List<T>"
	assert r.render_symbol(lst, SubstContext(class_types=(lib.int_t,))) == "System.Collections.Generic.List<int>"
	assert r.render_symbol(lib.int32) == "int"


def test_nested_aggregate_in_terms_of_enclosing_instantiation(lib):
	outer = aggregate(namespace(lib.root, "N"), "Outer", ["T"])
	inner = aggregate(outer, "Inner")
	r = lib.renderer()
	assert r.render_symbol(inner) == "N.Outer<T>.Inner"
	assert r.render_symbol(inner, SubstContext(class_types=(lib.int_t,))) == "N.Outer<int>.Inner"


def test_fields_locals_and_type_parameters(lib, foo):
	r = lib.renderer()
	assert r.render_symbol(FieldSymbol(name="count", parent=foo)) == "N.Foo.count"
	meth = method(foo, "Run")
	assert r.render_symbol(LocalVariableSymbol(name="x", parent=meth)) == "x"
	assert r.render_symbol(TypeParameterSymbol(name="T", parent=foo, index=0)) == "T"
	assert r.render_symbol(TypeParameterSymbol(parent=foo, index=1)) == "!1"
	assert r.render_symbol(TypeParameterSymbol(parent=meth, index=1, is_method_type_param=True)) == "!!1"


def test_ordinary_method_with_param_array(lib, foo):
	bar = method(foo, "Bar", [lib.int_t, ArrayType(lib.string_t)], is_param_array=True)
	r = lib.renderer()
	assert r.render_symbol(bar) == "N.Foo.Bar(int, params string[])"
	assert r.render_symbol(bar, args=False) == "N.Foo.Bar"


def test_varargs_methods(lib, foo):
	r = lib.renderer()
	assert r.render_symbol(method(foo, "Printf", [lib.string_t], is_varargs=True)) == "N.Foo.Printf(string, ...)"
	assert r.render_symbol(method(foo, "Dump", is_varargs=True)) == "N.Foo.Dump(...)"


def test_ref_and_out_parameters(lib, foo):
	parse = method(foo, "TryParse", [lib.string_t, ParameterModifierType(lib.int_t, is_out=True)])
	assert lib.renderer().render_symbol(parse) == "N.Foo.TryParse(string, out int)"


def test_generic_method_type_parameters(lib, foo):
	mapper = method(foo, "Map", type_params=["U"])
	mapper.params = (mapper.type_vars[0],)
	r = lib.renderer()
	assert r.render_symbol(mapper) == "N.Foo.Map<U>(U)"
	assert r.render_symbol(mapper, SubstContext(method_types=(lib.int_t,))) == "N.Foo.Map<int>(int)"


def test_member_of_generic_type_through_instantiation(lib, generic):
	lst = aggregate(generic, "List", ["T"])
	add = method(lst, "Add", [lst.type_vars[0]])
	r = lib.renderer()
	assert r.render_symbol(add) == "System.Collections.Generic.List<T>.Add(T)"
	ctx = SubstContext.from_type(inst(lst, lib.int_t))
	assert r.render_symbol(add, ctx) == "System.Collections.Generic.List<int>.Add(int)"


def test_constructor_and_destructor_use_class_name(lib, foo):
	ctor = method(foo, ".ctor", [lib.int_t], is_constructor=True)
	dtor = method(foo, "Finalize", is_destructor=True)
	r = lib.renderer()
	text = r.render_symbol(ctor)
	assert text == "N.Foo.Foo(int)"
	assert ".ctor" not in text
	assert r.render_symbol(dtor) == "N.Foo.~Foo()"


def test_conversion_operators(lib, foo):
	to_int = method(foo, "op_Implicit", [inst(foo)], returns=lib.int_t, is_conversion_operator=True, is_implicit=True, is_operator=True)
	to_str = method(foo, "op_Explicit", [inst(foo)], returns=lib.string_t, is_conversion_operator=True, is_operator=True)
	r = lib.renderer()
	assert r.render_symbol(to_int) == "N.Foo.implicit operator int(N.Foo)"
	assert r.render_symbol(to_str) == "N.Foo.explicit operator string(N.Foo)"


def test_conversion_operator_return_type_goes_through_context(lib, foo):
	box = aggregate(foo.parent, "Box", ["T"])
	box_t = inst(box, box.type_vars[0])
	unwrap = method(box, "op_Implicit", [box_t], returns=box.type_vars[0], is_conversion_operator=True, is_implicit=True, is_operator=True)
	r = lib.renderer()
	assert r.render_symbol(unwrap) == "N.Box<T>.implicit operator T(N.Box<T>)"
	ctx = SubstContext.from_type(inst(box, lib.int_t))
	assert r.render_symbol(unwrap, ctx) == "N.Box<int>.implicit operator int(N.Box<int>)"


def test_user_defined_operators(lib, foo):
	foo_t = inst(foo)
	add = method(foo, "op_Addition", [foo_t, foo_t], returns=foo_t, is_operator=True)
	neg = method(foo, "op_UnaryNegation", [foo_t], returns=foo_t, is_operator=True)
	eq = method(foo, "op_Equals", [foo_t], is_operator=True)
	cmp = method(foo, "op_Compare", [foo_t], is_operator=True)
	r = lib.renderer()
	assert r.render_symbol(add) == "N.Foo.operator +(N.Foo, N.Foo)"
	assert r.render_symbol(add, args=False) == "N.Foo.operator +"
	assert r.render_symbol(neg, args=False) == "N.Foo.operator -"
	assert r.render_symbol(eq, args=False) == "N.Foo.operator equals"
	assert r.render_symbol(cmp, args=False) == "N.Foo.operator compare"


def test_unknown_operator_name_is_fatal(lib, foo):
	weird = method(foo, "op_Spaceship", is_operator=True)
	r = lib.renderer()
	with pytest.raises(RenderError):
		r.render_symbol(weird)
	assert not r.session.is_open


def test_property_accessors(lib, foo):
	prop = PropertySymbol(name="Count", parent=foo)
	prop.getter = MethodSymbol(name="get_Count", parent=foo, owner_property=prop)
	prop.setter = MethodSymbol(name="set_Count", parent=foo, owner_property=prop, params=(lib.int_t,))
	r = lib.renderer()
	assert r.render_symbol(prop) == "N.Foo.Count"
	assert r.render_symbol(prop.getter) == "N.Foo.Count.get"
	assert r.render_symbol(prop.setter) == "N.Foo.Count.set"


def test_detached_accessor_is_fatal(lib, foo):
	prop = PropertySymbol(name="Count", parent=foo)
	stray = MethodSymbol(name="get_Count", parent=foo, owner_property=prop)
	with pytest.raises(RenderError):
		lib.renderer().render_symbol(stray)


def test_events_render_empty_and_accessors_follow(lib, foo):
	event = EventSymbol(name="Changed", parent=foo)
	event.adder = MethodSymbol(name="add_Changed", parent=foo, owner_event=event)
	event.remover = MethodSymbol(name="remove_Changed", parent=foo, owner_event=event)
	r = lib.renderer()
	assert r.render_symbol(event) == ""
	assert r.render_symbol(event.adder) == r.render_symbol(event) + ".add"
	assert r.render_symbol(event.remover) == ".remove"


def test_explicit_interface_method_uses_interface_name(lib, foo, generic):
	ienum = aggregate(generic, "IEnumerable", ["T"], agg_kind=AggKind.INTERFACE)
	get_enum = method(ienum, "GetEnumerator")
	impl = method(
		foo,
		"Impl_GetEnumerator",
		is_explicit_impl=True,
		explicit_impl=SymWithType(get_enum, inst(ienum, lib.int_t)),
	)
	r = lib.renderer()
	text = r.render_symbol(impl)
	assert text == "N.Foo.System.Collections.Generic.IEnumerable<int>.GetEnumerator()"
	assert "Impl_GetEnumerator" not in text
	assert r.render_symbol(impl, args=False) == "N.Foo.System.Collections.Generic.IEnumerable<int>.GetEnumerator"


def test_explicit_interface_slot_is_substituted_through_context(lib, generic):
	ienum = aggregate(generic, "IEnumerable", ["T"], agg_kind=AggKind.INTERFACE)
	get_enum = method(ienum, "GetEnumerator")
	bag = aggregate(namespace(lib.root, "N"), "Bag", ["T"])
	impl = method(
		bag,
		"GetEnumerator",
		is_explicit_impl=True,
		explicit_impl=SymWithType(get_enum, inst(ienum, bag.type_vars[0])),
	)
	ctx = SubstContext.from_type(inst(bag, lib.string_t))
	assert lib.renderer().render_symbol(impl, ctx) == "N.Bag<string>.System.Collections.Generic.IEnumerable<string>.GetEnumerator()"


def test_unresolved_explicit_method_uses_synthetic_name(lib, foo):
	impl = method(
		foo,
		"IMissing.Run",
		[lib.int_t],
		is_explicit_impl=True,
		err_explicit_impl=ErrorType(ns_parent=lib.root, name_text="IMissing.Run", type_args=()),
	)
	assert lib.renderer().render_symbol(impl) == "N.Foo.IMissing.Run(int)"


def test_bogus_signature_renders_empty_parameter_list(lib, foo):
	missing = aggregate(lib.system, "Missing", is_bogus=True)
	use = method(foo, "Use", [inst(missing), lib.int_t])
	assert lib.renderer().render_symbol(use) == "N.Foo.Use()"


def test_indexers(lib, foo, generic):
	idx = PropertySymbol(
		name="$Item$",
		parent=foo,
		is_indexer=True,
		params=(lib.int_t, ArrayType(lib.string_t)),
		is_param_array=True,
	)
	lst = aggregate(generic, "List", ["T"])
	lst_idx = PropertySymbol(name="$Item$", parent=lst, is_indexer=True, params=(lst.type_vars[0],))
	r = lib.renderer()
	assert r.render_symbol(idx) == "N.Foo.this[int, params string[]]"
	ctx = SubstContext.from_type(inst(lst, lib.int_t))
	assert r.render_symbol(lst_idx, ctx) == "System.Collections.Generic.List<int>.this[int]"


def test_explicit_interface_property(lib, foo):
	iface = aggregate(foo.parent, "IHasCount", agg_kind=AggKind.INTERFACE)
	count = PropertySymbol(name="Count", parent=iface)
	impl = PropertySymbol(
		name="N.IHasCount.Count",
		parent=foo,
		is_explicit_impl=True,
		explicit_impl=SymWithType(count, inst(iface)),
	)
	assert lib.renderer().render_symbol(impl) == "N.Foo.N.IHasCount.Count"


def test_unresolved_explicit_indexer_falls_back_to_synthetic_name(lib, foo):
	impl = PropertySymbol(
		name="$Item$",
		parent=foo,
		is_indexer=True,
		params=(lib.int_t,),
		is_explicit_impl=True,
		err_explicit_impl=ErrorType(ns_parent=lib.root, name_text="IList", type_args=()),
	)
	assert lib.renderer().render_symbol(impl) == "N.Foo.IList.this[int]"


def test_scope_symbols_are_fatal(lib, foo):
	with pytest.raises(RenderError):
		lib.renderer().render_symbol(ScopeSymbol(parent=method(foo, "Run")))
