import pytest

from dto_codegen.dto import ABSTRACT_DTO
from dto_codegen.errors import CycleError
from dto_codegen.pipeline.analyzer import DependencyAnalyzer
from dto_codegen.pipeline.schema.nodes import DtoDefinition, FieldDefinition


def ref(name, target, required=False):
    """A single DTO-typed field as left by completion"""
    return FieldDefinition(
        name=name,
        type=f"\\App\\Dto\\{target}Dto",
        dto=target,
        required=required,
        nullable=not required,
    )


def many(name, target, singular_nullable=False):
    """A collection of DTOs as left by completion"""
    return FieldDefinition(
        name=name,
        type=f"\\App\\Dto\\{target}Dto[]|\\collections\\UserList",
        collection=True,
        nullable=False,
        singular_type=f"\\App\\Dto\\{target}Dto",
        singular_nullable=singular_nullable,
    )


def make_set(**dtos):
    schema_set = {}
    for name, fields in dtos.items():
        schema_set[name] = DtoDefinition(name=name, fields={field.name: field for field in fields})
    return schema_set


class TestGraph:
    """Test cases for dependency extraction"""

    def test_field_and_collection_dependencies(self):
        schema_set = make_set(
            Order=[ref("customer", "Customer"), many("items", "Item")],
            Customer=[],
            Item=[],
        )

        graph = DependencyAnalyzer().analyze(schema_set)

        assert graph == {"Order": ["Customer", "Item"], "Customer": [], "Item": []}

    def test_scalar_fields_have_no_dependencies(self):
        schema_set = make_set(Order=[FieldDefinition(name="id", type="int"), FieldDefinition(name="tags", type="string[]")])
        assert DependencyAnalyzer().build_graph(schema_set) == {"Order": []}

    def test_duplicate_targets_are_listed_once(self):
        schema_set = make_set(Order=[ref("billing", "Address"), ref("shipping", "Address")], Address=[])
        assert DependencyAnalyzer().build_graph(schema_set)["Order"] == ["Address"]

    def test_parent_is_a_dependency(self):
        schema_set = make_set(Base=[], Child=[])
        schema_set["Child"].extends = "BaseDto"

        assert DependencyAnalyzer().build_graph(schema_set)["Child"] == ["Base"]

    def test_default_base_is_not_a_dependency(self):
        schema_set = make_set(Child=[])
        schema_set["Child"].extends = ABSTRACT_DTO

        assert DependencyAnalyzer().build_graph(schema_set)["Child"] == []

    def test_namespaced_dependency(self):
        child = FieldDefinition(name="child", type="\\App\\Dto\\Sub\\ChildDto", dto="Sub/Child")
        schema_set = make_set(Order=[child], **{"Sub/Child": []})
        assert DependencyAnalyzer().build_graph(schema_set)["Order"] == ["Sub/Child"]


class TestCycles:
    """Test cases for circular dependency detection"""

    def test_three_node_cycle(self):
        schema_set = make_set(A=[ref("b", "B")], B=[ref("c", "C")], C=[ref("a", "A")])

        with pytest.raises(CycleError) as exc_info:
            DependencyAnalyzer().analyze(schema_set)

        assert "Circular dependency detected: A -> B -> C -> A" in str(exc_info.value)
        assert exc_info.value.path == ["A", "B", "C", "A"]

    def test_diamond_is_not_a_cycle(self):
        schema_set = make_set(
            A=[ref("b", "B"), ref("c", "C")],
            B=[ref("d", "D")],
            C=[ref("d", "D")],
            D=[],
        )
        DependencyAnalyzer().analyze(schema_set)

    def test_inheritance_cycle(self):
        schema_set = make_set(A=[], B=[])
        schema_set["A"].extends = "BDto"
        schema_set["B"].extends = "ADto"

        with pytest.raises(CycleError, match="A -> B -> A"):
            DependencyAnalyzer().analyze(schema_set)


class TestSelfReference:
    """Test cases for DTOs referencing themselves"""

    def test_self_reference_is_a_cycle_by_default(self):
        schema_set = make_set(Category=[ref("parent", "Category")])

        with pytest.raises(CycleError) as exc_info:
            DependencyAnalyzer().analyze(schema_set)

        assert exc_info.value.path == ["Category", "Category"]

    def test_nullable_self_reference_allowed(self):
        schema_set = make_set(Category=[ref("parent", "Category")])

        graph = DependencyAnalyzer(allow_nullable_self_reference=True).analyze(schema_set)

        assert graph == {"Category": []}

    def test_required_self_reference_still_rejected(self):
        schema_set = make_set(Node=[ref("next", "Node", required=True)])

        with pytest.raises(CycleError):
            DependencyAnalyzer(allow_nullable_self_reference=True).analyze(schema_set)

    def test_collection_self_reference_needs_nullable_elements(self):
        analyzer = DependencyAnalyzer(allow_nullable_self_reference=True)

        with pytest.raises(CycleError):
            analyzer.analyze(make_set(Category=[many("children", "Category")]))

        analyzer.analyze(make_set(Category=[many("children", "Category", singular_nullable=True)]))

    def test_plain_array_self_reference_needs_nullable_elements(self):
        def children(singular_nullable):
            return FieldDefinition(
                name="children",
                type="(\\App\\Dto\\CategoryDto|null)[]" if singular_nullable else "\\App\\Dto\\CategoryDto[]",
                is_array=True,
                nullable=False,
                singular_type="\\App\\Dto\\CategoryDto",
                singular_nullable=singular_nullable,
            )

        analyzer = DependencyAnalyzer(allow_nullable_self_reference=True)

        with pytest.raises(CycleError):
            analyzer.analyze(make_set(Category=[children(False)]))

        assert analyzer.analyze(make_set(Category=[children(True)])) == {"Category": []}


class TestAllDependencies:
    """Test cases for transitive dependency lookup"""

    def test_discovery_order(self):
        schema_set = make_set(
            A=[ref("b", "B"), ref("c", "C")],
            B=[ref("d", "D")],
            C=[ref("d", "D")],
            D=[],
        )

        assert DependencyAnalyzer().get_all_dependencies("A", schema_set) == ["B", "D", "C"]
        assert DependencyAnalyzer().get_all_dependencies("D", schema_set) == []

    def test_unknown_dto(self):
        assert DependencyAnalyzer().get_all_dependencies("Missing", {}) == []


if __name__ == "__main__":
    pytest.main([__file__])
