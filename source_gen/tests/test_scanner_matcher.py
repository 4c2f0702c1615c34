from __future__ import annotations

from _builders import prop, usage
from source_gen.pipeline import (
    AttributeUsage,
    MarkerIdentity,
    MarkerScope,
    MemberDeclaration,
    MemberKind,
    SymbolResolutionError,
    SymbolResolver,
    TypeDeclaration,
    match,
    scan,
)

INCLUDE = MarkerIdentity.parse("SourceGen.IncludeInEqualsAttribute")
MERGE = MarkerIdentity.parse("SourceGen.GenerateCompareAndMergeAttribute")


class CannedResolver(SymbolResolver):
    """Resolver returning canned identities and recording what it was asked."""

    def __init__(self, identities: dict[str, MarkerIdentity], failing: tuple[str, ...] = ()):
        self.identities = identities
        self.failing = failing
        self.calls: list[str] = []

    def resolve_attribute(self, usage):
        self.calls.append(usage.name)
        if usage.name in self.failing:
            raise SymbolResolutionError(f"cannot bind {usage.name}")
        return self.identities.get(usage.name)

    def lookup_type(self, qualified_name):
        return None


class TestScan:
    def test_keeps_declarations_with_member_attributes_in_order(self, employee, company):
        plain = TypeDeclaration(name="Plain", members=[prop("X")])
        assert scan([company, plain, employee]) == [company, employee]

    def test_over_selects_any_attribute(self):
        obsolete = TypeDeclaration(name="Legacy", members=[prop("X", "int", "Obsolete")])
        assert scan([obsolete]) == [obsolete]

    def test_method_attributes_count(self):
        declaration = TypeDeclaration(name="A", members=[prop("Run", "void", "Test", kind=MemberKind.METHOD)])
        assert scan([declaration]) == [declaration]

    def test_type_scope_looks_at_type_attributes(self, employee, mergeable):
        assert scan([employee, mergeable], MarkerScope.TYPE) == [mergeable]

    def test_drops_malformed_entries(self, employee):
        assert scan([None, "Employee", employee, 42]) == [employee]

    def test_empty_input(self):
        assert scan([]) == []


class TestMatch:
    def test_member_marker_matches(self, employee, resolver):
        assert match(employee, INCLUDE, resolver) is employee

    def test_type_marker_matches(self, mergeable, resolver):
        assert match(mergeable, MERGE, resolver, MarkerScope.TYPE) is mergeable

    def test_other_marker_does_not_match(self, employee, resolver):
        assert match(employee, MERGE, resolver) is None

    def test_scope_is_respected(self, mergeable, resolver):
        # The merge marker is on the type, not on members
        assert match(mergeable, MERGE, resolver, MarkerScope.MEMBER) is None

    def test_unresolvable_usage_is_skipped(self, resolver):
        declaration = TypeDeclaration(
            name="A",
            members=[prop("X", "int", "Unknown"), prop("Y", "int", "IncludeInEquals")],
        )
        assert match(declaration, INCLUDE, resolver) is declaration

    def test_resolution_errors_are_not_fatal(self):
        resolver = CannedResolver({"Include": INCLUDE}, failing=("Broken",))
        declaration = TypeDeclaration(
            name="A",
            members=[MemberDeclaration(name="X", attributes=[AttributeUsage("Broken"), AttributeUsage("Include")])],
        )
        assert match(declaration, INCLUDE, resolver) is declaration
        assert resolver.calls == ["Broken", "Include"]

    def test_first_hit_stops_the_search(self):
        resolver = CannedResolver({"Include": INCLUDE})
        declaration = TypeDeclaration(
            name="A",
            members=[
                MemberDeclaration(name="X", attributes=[AttributeUsage("Include")]),
                MemberDeclaration(name="Y", attributes=[AttributeUsage("Include")]),
            ],
        )
        match(declaration, INCLUDE, resolver)
        assert resolver.calls == ["Include"]

    def test_identity_compared_structurally(self):
        resolver = CannedResolver({"Include": MarkerIdentity("SourceGen", "IncludeInEqualsAttribute")})
        declaration = TypeDeclaration(name="A", attributes=[AttributeUsage("Include")])
        assert match(declaration, INCLUDE, resolver, MarkerScope.TYPE) is declaration

    def test_non_declaration_returns_none(self, resolver):
        assert match("Employee", INCLUDE, resolver) is None

    def test_no_usages(self, resolver):
        assert match(TypeDeclaration(name="A", members=[prop("X")]), INCLUDE, resolver) is None
        assert match(TypeDeclaration(name="A", attributes=[usage("Obsolete")]), MERGE, resolver, MarkerScope.TYPE) is None
