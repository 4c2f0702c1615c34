from __future__ import annotations

import pytest

from source_gen.pipeline import AttributeUsage, MarkerIdentity, TypeDeclaration, TypeMetadata, TypeTableResolver, build_resolver

INCLUDE = MarkerIdentity("SourceGen", "IncludeInEqualsAttribute")


class TestTypeTableResolver:
    @pytest.mark.parametrize(
        "name,scope",
        [
            ("IncludeInEquals", ("SourceGen",)),
            ("IncludeInEqualsAttribute", ("SourceGen",)),
            ("SourceGen.IncludeInEquals", ()),
            ("SourceGen.IncludeInEqualsAttribute", ()),
            ("global::SourceGen.IncludeInEquals", ()),
            ("IncludeInEquals", ("ConsoleClient", "System", "SourceGen")),
        ],
    )
    def test_resolves_written_forms(self, resolver, name, scope):
        assert resolver.resolve_attribute(AttributeUsage(name, scope)) == INCLUDE

    def test_unknown_attribute_is_none(self, resolver):
        assert resolver.resolve_attribute(AttributeUsage("Obsolete", ("System",))) is None

    def test_name_outside_scope_is_none(self, resolver):
        assert resolver.resolve_attribute(AttributeUsage("IncludeInEquals", ("ConsoleClient",))) is None

    def test_scope_order_decides_between_homonyms(self):
        resolver = TypeTableResolver([TypeMetadata("A.MarkAttribute"), TypeMetadata("B.MarkAttribute")])
        assert resolver.resolve_attribute(AttributeUsage("Mark", ("B", "A"))) == MarkerIdentity("B", "MarkAttribute")
        assert resolver.resolve_attribute(AttributeUsage("Mark", ("A", "B"))) == MarkerIdentity("A", "MarkAttribute")

    def test_exact_name_preferred_over_suffixed(self):
        resolver = TypeTableResolver([TypeMetadata("Ns.Mark"), TypeMetadata("Ns.MarkAttribute")])
        assert resolver.resolve_attribute(AttributeUsage("Mark", ("Ns",))) == MarkerIdentity("Ns", "Mark")

    def test_lookup_and_register(self):
        resolver = TypeTableResolver()
        assert resolver.lookup_type("Ns.Mark") is None
        resolver.register_type(TypeMetadata("Ns.Mark"))
        assert resolver.lookup_type("Ns.Mark") == TypeMetadata("Ns.Mark")
        assert "Ns.Mark" in resolver
        assert len(resolver) == 1


def test_build_resolver_registers_declarations_and_extra_types():
    declarations = [
        TypeDeclaration(name="Employee", namespace="ConsoleClient"),
        TypeDeclaration(name="Point", keyword="struct"),
        TypeDeclaration(name=""),
    ]
    resolver = build_resolver(declarations, [TypeMetadata(INCLUDE.qualified_name)])

    assert resolver.lookup_type("ConsoleClient.Employee") == TypeMetadata("ConsoleClient.Employee", "class")
    assert resolver.lookup_type("Point").kind == "struct"
    assert INCLUDE.qualified_name in resolver
    assert len(resolver) == 3
