"""
測試共用 fixtures
"""

import pytest

from schema_compiler import (
    ACCESS_CATALOG,
    AttributeDescriptor,
    CompilerConfig,
    EntityDescriptor,
    IdType,
    SchemaDiffOrchestrator,
    StatementBuilder,
    StaticMetadataProvider,
    TypeDescriptor,
)
from schema_compiler.utils import NullLogger


def attr(name, class_name, package="java.lang", **kwargs):
    """建立屬性描述的捷徑"""
    return AttributeDescriptor(name=name, type=TypeDescriptor.of(class_name, package), **kwargs)


@pytest.fixture
def catalog():
    return ACCESS_CATALOG


@pytest.fixture
def config():
    return CompilerConfig(logger=NullLogger())


@pytest.fixture
def builder(catalog, config):
    return StatementBuilder(catalog, config=config)


@pytest.fixture
def provider():
    return StaticMetadataProvider()


@pytest.fixture
def orchestrator(catalog, provider, builder, config):
    return SchemaDiffOrchestrator(catalog, provider, builder=builder, config=config)


@pytest.fixture
def customer():
    """UUID 主鍵、含嵌入地址的客戶實體"""
    address = attr(
        "address", "Address", package="com.example",
        is_embedded=True,
        column_prefix="ADDR_",
        embedded_attributes=(
            attr("street", "String", length=200),
            attr("city", "String", length=50),
        ),
    )
    return EntityDescriptor(
        name="Customer",
        table="CUSTOMER",
        id_type=IdType.UUID,
        attributes=(
            attr("id", "UUID", package="java.util", is_id=True),
            attr("name", "String", length=100),
            attr("age", "Integer", is_mandatory=True),
            attr("balance", "BigDecimal", package="java.math", precision=19, scale=2),
            attr("status", "Status", package="com.example", is_enum=True, enum_id_type="String"),
            address,
        ),
    )


@pytest.fixture
def sales_order():
    """identity 主鍵、參照客戶的訂單實體，NUMBER 為保留字"""
    return EntityDescriptor(
        name="SalesOrder",
        table="SALES_ORDER",
        id_type=IdType.LONG_IDENTITY,
        soft_delete=True,
        attributes=(
            attr("id", "Long", is_id=True),
            attr(
                "customer", "Customer", package="com.example",
                is_class=True,
                is_mandatory=True,
                references="CUSTOMER",
                reference_id_type=IdType.UUID,
            ),
            attr("number", "String", length=20, is_mandatory=True),
        ),
    )
