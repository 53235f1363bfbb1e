import pytest

from dto_codegen.inflector import (
    camelize,
    dasherize,
    field_name_to_accessor_name,
    singularize,
    underscore,
    variable,
)


class TestInflector:
    """Test cases for name inflection"""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("user_name", "UserName"),
            ("userName", "UserName"),
            ("user-name", "UserName"),
            ("Order", "Order"),
        ],
    )
    def test_camelize(self, text, expected):
        assert camelize(text) == expected

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("UserName", "user_name"),
            ("userName", "user_name"),
            ("HTTPClient", "http_client"),
            ("item", "item"),
        ],
    )
    def test_underscore(self, text, expected):
        assert underscore(text) == expected

    def test_variable(self):
        assert variable("default_value") == "defaultValue"
        assert variable("OrderItem") == "orderItem"

    def test_dasherize(self):
        assert dasherize("OrderItem") == "order-item"

    @pytest.mark.parametrize(
        "plural,singular",
        [
            ("items", "item"),
            ("categories", "category"),
            ("addresses", "address"),
            ("statuses", "status"),
            ("children", "child"),
            ("people", "person"),
            ("matrices", "matrix"),
            ("boxes", "box"),
            ("wolves", "wolf"),
            ("knives", "knife"),
            ("analyses", "analysis"),
            ("employees", "employee"),
            ("Items", "Item"),
        ],
    )
    def test_singularize(self, plural, singular):
        assert singularize(plural) == singular

    def test_singularize_is_deterministic(self):
        assert singularize("orderLines") == singularize("orderLines") == "orderLine"

    @pytest.mark.parametrize("word", ["data", "news", "sheep", "series", "status", ""])
    def test_singularize_returns_word_unchanged(self, word):
        assert singularize(word) == word

    def test_field_name_to_accessor_name(self):
        assert field_name_to_accessor_name("firstName") == "FirstName"
        assert field_name_to_accessor_name("first_name") == "FirstName"


if __name__ == "__main__":
    pytest.main([__file__])
