import pytest

from dto_codegen.pipeline.analyzer.array_shape_builder import ArrayShapeBuilder
from dto_codegen.pipeline.schema.nodes import DtoDefinition, FieldDefinition


@pytest.fixture
def builder():
    return ArrayShapeBuilder()


def scalar(name, type_string, required=False):
    return FieldDefinition(name=name, type=type_string, type_hint=type_string, required=required, nullable=not required)


class TestGenericTypes:
    """Test cases for generic array and collection doc types"""

    def test_scalar_array(self, builder):
        field = FieldDefinition(name="tags", type="string[]")
        assert builder.build_generic_array_type(field) == "array<int, string>"

    def test_singular_type_wins_over_type(self, builder):
        field = FieldDefinition(name="items", type="\\App\\Dto\\ItemDto[]", singular_type="\\App\\Dto\\ItemDto")
        assert builder.build_generic_array_type(field) == "array<int, \\App\\Dto\\ItemDto>"

    def test_associative_array_uses_configured_key_type(self):
        field = FieldDefinition(name="tags", type="string[]", associative=True)
        assert ArrayShapeBuilder(associative_key_type="int|string").build_generic_array_type(field) == (
            "array<int|string, string>"
        )

    def test_nullable_elements(self, builder):
        field = FieldDefinition(name="tags", type="string[]", singular_type="string", singular_nullable=True)
        assert builder.build_generic_array_type(field) == "array<int, string|null>"

    def test_collection(self, builder):
        field = FieldDefinition(
            name="items",
            collection=True,
            collection_type="\\collections\\UserList",
            singular_type="\\App\\Dto\\ItemDto",
            singular_nullable=True,
        )
        assert builder.build_generic_collection_type(field) == "\\collections\\UserList<int, \\App\\Dto\\ItemDto|null>"

    def test_collection_without_element_type(self, builder):
        field = FieldDefinition(name="items", collection=True, collection_type="\\collections\\UserList")
        assert builder.build_generic_collection_type(field) == "\\collections\\UserList<int, mixed>"


class TestArrayShape:
    """Test cases for array shapes of whole DTOs"""

    def test_flat_shape(self, builder):
        fields = {"id": scalar("id", "int", required=True), "name": scalar("name", "string")}
        assert builder.build_array_shape(fields) == "array{id: int, name: string|null}"

    def test_empty_shape(self, builder):
        assert builder.build_array_shape({}) == "array{}"

    def test_nested_dto_is_inlined(self, builder):
        customer = DtoDefinition(name="Customer", fields={"email": scalar("email", "string", required=True)})
        order = DtoDefinition(
            name="Order",
            fields={"customer": FieldDefinition(name="customer", dto="Customer", type="\\App\\Dto\\CustomerDto")},
        )
        all_dtos = {"Order": order, "Customer": customer}

        shape = builder.build_array_shape(order.fields, all_dtos, order)

        assert shape == "array{customer: array{email: string}|null}"

    def test_collection_elements_are_inlined(self, builder):
        item = DtoDefinition(name="Item", fields={"sku": scalar("sku", "string", required=True)})
        order = DtoDefinition(
            name="Order",
            fields={
                "items": FieldDefinition(
                    name="items",
                    collection=True,
                    nullable=False,
                    singular_type="\\App\\Dto\\ItemDto",
                )
            },
        )

        shape = builder.build_array_shape(order.fields, {"Order": order, "Item": item}, order)

        assert shape == "array{items: array<int, array{sku: string}>}"

    def test_self_reference_is_not_expanded(self, builder):
        category = DtoDefinition(name="Category")
        category.fields = {
            "children": FieldDefinition(
                name="children",
                is_array=True,
                nullable=False,
                singular_type="\\App\\Dto\\CategoryDto",
            )
        }

        shape = builder.build_array_shape(category.fields, {"Category": category}, category)

        assert shape == "array{children: array<int, array<string, mixed>>}"

    def test_parent_fields_come_first(self, builder):
        base = DtoDefinition(name="Base", fields={"id": scalar("id", "int", required=True)})
        child = DtoDefinition(name="Child", extends="BaseDto", fields={"title": scalar("title", "string")})

        shape = builder.build_array_shape(child.fields, {"Base": base, "Child": child}, child)

        assert shape == "array{id: int, title: string|null}"

    def test_external_parent_is_ignored(self, builder):
        child = DtoDefinition(
            name="Child",
            extends="\\dto_codegen\\dto\\AbstractDto",
            fields={"title": scalar("title", "string", required=True)},
        )
        assert builder.build_array_shape(child.fields, {"Child": child}, child) == "array{title: string}"


if __name__ == "__main__":
    pytest.main([__file__])
