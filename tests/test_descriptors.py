"""
實體/屬性描述與識別符處理測試
"""

import pytest

from schema_compiler import AttributeDescriptor, ColumnDefinition, EntityDescriptor, IdType, TypeDescriptor
from schema_compiler.exceptions import InvalidAttributeConfigurationError
from schema_compiler.utils.quoting import IdentifierQuoter, escape_string

from conftest import attr


class TestDescriptors:
    def test_column_name_derivation(self, customer, sales_order):
        assert customer.column_name(customer.attribute("name")) == "NAME"
        assert sales_order.column_name(sales_order.attribute("customer")) == "CUSTOMER_ID"

        entity = EntityDescriptor(
            name="Invoice",
            table="INVOICE",
            attributes=(attr("issueDate", "Date", package="java.util"), attr("note", "String", column="MEMO")),
        )
        assert entity.column_name(entity.attribute("issueDate")) == "ISSUE_DATE"
        assert entity.column_name(entity.attribute("note")) == "MEMO"

    def test_id_attribute(self, customer):
        assert customer.id_attribute.name == "id"

        entity = EntityDescriptor(name="Log", table="LOG", attributes=(attr("text", "String"),))
        with pytest.raises(InvalidAttributeConfigurationError):
            entity.id_attribute

    def test_unknown_attribute(self, customer):
        with pytest.raises(InvalidAttributeConfigurationError) as exc_info:
            customer.attribute("missing")
        assert exc_info.value.table == "CUSTOMER"

    def test_embedded_without_children_rejected(self):
        with pytest.raises(InvalidAttributeConfigurationError):
            AttributeDescriptor(name="address", type=TypeDescriptor.of("Address", "com.example"), is_embedded=True)

    def test_type_descriptor_flags(self):
        assert TypeDescriptor.of("String").is_text
        assert TypeDescriptor.of("Character").is_text
        assert TypeDescriptor.of("BigDecimal", "java.math").is_decimal
        assert not TypeDescriptor.of("Integer").is_text

    def test_id_type_identity(self):
        assert IdType.LONG_IDENTITY.is_identity
        assert IdType.INTEGER_IDENTITY.is_identity
        assert not IdType.UUID.is_identity
        assert IdType("String") is IdType.STRING

    def test_entity_from_dict(self):
        entity = EntityDescriptor.from_dict({
            "name": "Product",
            "table": "PRODUCT",
            "id_type": "Long",
            "attributes": [
                {"name": "id", "type": "Long", "is_id": True},
                {"name": "title", "type": "String", "length": 80, "is_mandatory": True},
                {
                    "name": "price",
                    "type": {"fqn": "java.math.BigDecimal", "class_name": "BigDecimal"},
                    "precision": 12,
                    "scale": 2,
                },
            ],
            "unused": "ignored",
        })
        assert entity.id_type is IdType.LONG
        assert entity.attribute("title").length == 80
        assert entity.attribute("title").type.fqn == "java.lang.String"
        assert entity.attribute("price").type.is_decimal

    def test_column_definition_from_dict(self):
        column = ColumnDefinition.from_dict({"type": "varchar", "length": 20, "nullable": False, "extra": 1})
        assert column == ColumnDefinition(type="varchar", length=20, nullable=False)


class TestIdentifierQuoter:
    @pytest.fixture
    def quoter(self):
        return IdentifierQuoter(["USER", "ORDER"], "[", "]")

    def test_normalize_uppercases(self, quoter):
        assert quoter.normalize("customer") == "CUSTOMER"

    def test_reserved_words_quoted(self, quoter):
        assert quoter.normalize("user") == "[USER]"
        assert quoter.normalize("Order") == "[ORDER]"

    def test_special_characters_quoted(self, quoter):
        assert quoter.normalize("first name") == "[FIRST NAME]"
        assert quoter.quote("a]b") == "[a]]b]"

    def test_already_quoted_kept(self, quoter):
        assert quoter.normalize("[Mixed]") == "[Mixed]"

    def test_escape_string(self):
        assert escape_string("O'Brien") == "O''Brien"
