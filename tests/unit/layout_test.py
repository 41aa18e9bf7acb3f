"""Unit tests for the naming table and entity helpers."""

import pytest

from crudgen.errors import GeneratorError, InvalidBasePackage
from crudgen.javatypes import LONG, class_name
from crudgen.layout import LAYOUT_RULES, ArtifactKind, ArtifactLocation, derive_layout
from crudgen.model import EntityDescriptor, is_primary_key_name, pluralize, split_entity_id


@pytest.mark.parametrize(
    "kind, package, name",
    [
        (ArtifactKind.DTO, "x.y.model.dto", "OrderDTO"),
        (ArtifactKind.REQUEST, "x.y.model.request", "OrderRequest"),
        (ArtifactKind.RESPONSE, "x.y.model.response", "OrderResponse"),
        (ArtifactKind.QUERY, "x.y.model.request", "OrderQuery"),
        (ArtifactKind.REPOSITORY, "x.y.dal.repository", "OrderRepository"),
        (ArtifactKind.SERVICE, "x.y.service", "OrderService"),
        (ArtifactKind.SERVICE_IMPL, "x.y.service.impl", "OrderServiceImpl"),
        (ArtifactKind.CONVERTOR, "x.y.convertor", "OrderConvertor"),
        (ArtifactKind.CONTROLLER, "x.y.controller", "OrderController"),
    ],
)
def test_naming_table(kind: ArtifactKind, package: str, name: str) -> None:
    layout = derive_layout("x.y", "Order")
    assert layout[kind] == ArtifactLocation(package, name)


def test_layout_covers_every_kind_in_order() -> None:
    layout = derive_layout("x.y", "Order")
    assert [k for k, _ in layout] == list(ArtifactKind)
    assert set(LAYOUT_RULES) == set(ArtifactKind)


def test_layout_is_pure() -> None:
    assert derive_layout("x.y", "Order") == derive_layout("x.y", "Order")


def test_empty_base_package_is_rejected() -> None:
    with pytest.raises(InvalidBasePackage):
        derive_layout("", "Order")
    with pytest.raises(ValueError):
        derive_layout("  ", "Order")
    assert issubclass(InvalidBasePackage, GeneratorError)


def test_primary_key_names() -> None:
    assert is_primary_key_name("id")
    assert is_primary_key_name("deptId")
    assert not is_primary_key_name("paid")
    assert not is_primary_key_name("identity")


def test_pluralize() -> None:
    assert pluralize("User") == "Users"
    assert pluralize("Category") == "Categories"
    assert pluralize("Key") == "Keys"
    assert pluralize("Address") == "Addresses"


def test_split_entity_id() -> None:
    assert split_entity_id("com.acme.entity.User") == ("com.acme.entity", "User")
    assert split_entity_id("User") == ("", "User")


def test_entity_helpers(user_entity: EntityDescriptor) -> None:
    assert user_entity.qualified_name == "com.acme.entity.User"
    assert user_entity.base_package == "com.acme"
    assert user_entity.camel_name == "user"
    assert user_entity.primary_key.name == "id"
    assert user_entity.id_type == LONG


def test_primary_key_prefers_id(field_factory) -> None:
    e = EntityDescriptor("a.b", "Item", fields=(field_factory("ownerId", "String"), field_factory("id", "long")))
    assert e.primary_key.name == "id"
    assert e.id_type == class_name("java.lang", "Long")


def test_entity_without_primary_key_defaults_to_long(field_factory) -> None:
    e = EntityDescriptor("a.b", "Item", fields=(field_factory("name", "String"),))
    assert e.primary_key is None
    assert e.id_type == LONG


def test_accessor_names(field_factory) -> None:
    assert field_factory("active", "boolean").getter == "isActive"
    assert field_factory("active", "Boolean").getter == "getActive"
    assert field_factory("userName", "String").setter == "setUserName"
