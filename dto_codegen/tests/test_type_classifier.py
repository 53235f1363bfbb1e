import pytest

from dto_codegen.pipeline.analyzer.type_classifier import TypeClassifier, TypeKind, resolve_class
from dto_codegen.tests.fixtures import FIXTURES, OrderStatus


@pytest.fixture
def classifier():
    return TypeClassifier()


class TestScalar:
    """Test cases for scalar and union detection"""

    @pytest.mark.parametrize("type_string", ["int", "float", "string", "bool", "callable", "iterable", "object"])
    def test_scalar_keywords(self, classifier, type_string):
        assert classifier.is_scalar(type_string)

    def test_unions_of_scalars(self, classifier):
        assert classifier.is_scalar("int|string")
        assert classifier.is_scalar("int|string[]")

    def test_single_array_is_not_scalar(self, classifier):
        assert not classifier.is_scalar("string[]")

    def test_extra_allowed(self, classifier):
        assert not classifier.is_scalar("mixed")
        assert classifier.is_scalar("mixed", ("mixed",))

    def test_dto_name_is_not_scalar(self, classifier):
        assert not classifier.is_scalar("Item")
        assert not classifier.is_scalar("int|Item")


class TestArrayAndCollection:
    """Test cases for array and collection notation"""

    @pytest.mark.parametrize("type_string", ["array", "string[]", "Item[]", "?Item[]", "\\datetime\\date[]"])
    def test_array_types(self, classifier, type_string):
        assert classifier.is_array_type(type_string)

    @pytest.mark.parametrize("type_string", ["string", "Item", "unknown[]", "item[]", "\\no\\such\\Class[]"])
    def test_non_array_types(self, classifier, type_string):
        assert not classifier.is_array_type(type_string)

    def test_collection_rejects_nullable_element(self, classifier):
        assert classifier.is_collection_type("Item[]")
        assert classifier.is_collection_type("array")
        assert not classifier.is_collection_type("?Item[]")


class TestNames:
    """Test cases for DTO and field name validation"""

    @pytest.mark.parametrize("name", ["Item", "OrderItem", "Sub/Item", "Sub/Deep/OrderItem", "Item2"])
    def test_valid_dto_names(self, classifier, name):
        assert classifier.is_valid_dto_name(name)

    @pytest.mark.parametrize("name", ["item", "My_Dto", "HTTPClient", "Sub/item", "A", "Item[]"])
    def test_invalid_dto_names(self, classifier, name):
        assert not classifier.is_valid_dto_name(name)

    @pytest.mark.parametrize("name", ["id", "firstName", "Name2"])
    def test_valid_field_names(self, classifier, name):
        assert classifier.is_valid_field_name(name)

    @pytest.mark.parametrize("name", ["x", "first_name", "2nd", ""])
    def test_invalid_field_names(self, classifier, name):
        assert not classifier.is_valid_field_name(name)


class TestClassReference:
    """Test cases for importable class references"""

    def test_resolves_stdlib_class(self, classifier):
        import datetime

        assert resolve_class("\\datetime\\datetime") is datetime.datetime
        assert classifier.is_class_reference("\\datetime\\date")

    def test_resolves_builtin(self):
        assert resolve_class("\\dict") is dict

    def test_resolves_fixture(self):
        assert resolve_class(f"{FIXTURES}\\OrderStatus") is OrderStatus

    @pytest.mark.parametrize(
        "type_string",
        ["datetime\\date", "\\no\\such\\Class", "\\datetime\\nope", "\\os\\path\\join", "\\", "\\len"],
    )
    def test_unresolvable(self, classifier, type_string):
        assert not classifier.is_class_reference(type_string)


class TestClassify:
    """Test cases for single-category classification"""

    @pytest.mark.parametrize(
        "type_string,collection,kind",
        [
            ("int", False, TypeKind.SCALAR),
            ("int|string", False, TypeKind.SCALAR),
            ("int|string[]", False, TypeKind.SCALAR),
            ("mixed", False, TypeKind.SCALAR),
            ("Item", False, TypeKind.DTO),
            ("Sub/Item", False, TypeKind.DTO),
            ("\\datetime\\date", False, TypeKind.CLASS),
            ("Item[]", False, TypeKind.ARRAY),
            ("?Item[]", False, TypeKind.ARRAY),
            ("array", False, TypeKind.ARRAY),
            ("Item[]", True, TypeKind.COLLECTION),
            ("?Item[]", True, TypeKind.ARRAY),
        ],
    )
    def test_classify(self, classifier, type_string, collection, kind):
        assert classifier.classify(type_string, collection) is kind

    @pytest.mark.parametrize("type_string", ["", "item", "Item|int", "\\no\\Such", "Item[][]", "?Item"])
    def test_invalid_types(self, classifier, type_string):
        assert classifier.classify(type_string) is None
        assert not classifier.is_valid_type(type_string)

    def test_totality(self, classifier):
        """Every valid type falls into exactly one category"""
        samples = [
            "int",
            "bool|float",
            "string[]|int",
            "resource",
            "Order",
            "Sub/Order",
            "Order[]",
            "?Order[]",
            "int[]",
            "array",
            "\\datetime\\datetime",
            "\\datetime\\datetime[]",
            f"{FIXTURES}\\Money",
        ]
        for type_string in samples:
            assert classifier.is_valid_type(type_string), type_string
            matches = [
                classifier.is_scalar(type_string, classifier.doc_only_types),
                classifier.is_valid_dto_name(type_string),
                classifier.is_class_reference(type_string),
                classifier.is_array_type(type_string),
            ]
            assert matches.count(True) == 1, type_string


if __name__ == "__main__":
    pytest.main([__file__])
