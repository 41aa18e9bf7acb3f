"""Unit tests for Java type name parsing, rendering and imports."""

import pytest

from crudgen.javatypes import LIST, STRING, ImportTable, TypeName, best_guess, class_name, parameterized, render_import_block, render_type


def test_parses_nested_generics() -> None:
    """Packages are split from class names by case, arguments recursively."""
    t = best_guess("java.util.Map<java.lang.String, java.util.List<com.acme.Foo>>")
    assert t.package == "java.util"
    assert t.names == ("Map",)
    assert t.arguments[0] == STRING
    inner = t.arguments[1]
    assert inner.names == ("List",)
    assert inner.arguments[0].qualified_name == "com.acme.Foo"


def test_parses_nested_class_names() -> None:
    t = best_guess("java.util.Map.Entry<K, V>")
    assert t.package == "java.util"
    assert t.names == ("Map", "Entry")
    assert t.import_name == "java.util.Map"


def test_parses_wildcards() -> None:
    t = best_guess("List<? extends Number>")
    w = t.arguments[0]
    assert w.wildcard == "extends"
    assert w.arguments[0].names == ("Number",)
    assert best_guess("List<?>").arguments[0].wildcard == "?"


def test_parses_arrays() -> None:
    t = best_guess("int[][]")
    assert t.dimensions == 2
    assert not t.is_primitive
    assert t.is_collection


def test_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        best_guess("List<")
    with pytest.raises(ValueError):
        best_guess("Map<String, Long> extra")


def test_collection_detection() -> None:
    assert best_guess("java.util.List<String>").is_collection
    assert best_guess("Map<String, Address>").is_collection
    assert not best_guess("com.acme.List").is_collection
    assert not STRING.is_collection


def test_boxing() -> None:
    assert TypeName("", ("int",)).boxed() == class_name("java.lang", "Integer")
    assert TypeName("", ("boolean",)).boxed() == class_name("java.lang", "Boolean")
    assert STRING.boxed() is STRING


def test_str_renders_fully_qualified() -> None:
    assert str(parameterized(LIST, STRING)) == "java.util.List<java.lang.String>"
    assert str(best_guess("List<? super com.acme.Role>[]")) == "List<? super com.acme.Role>[]"


def test_import_table_collects_and_sorts() -> None:
    table = ImportTable("com.acme.model.dto", {"UserDTO"})
    table.register(parameterized(LIST, class_name("com.acme.entity", "User")))
    table.register(STRING)
    table.register(class_name("com.acme.model.dto", "OtherDTO"))
    assert table.imports() == ["com.acme.entity.User", "java.util.List"]


def test_import_table_first_registration_wins() -> None:
    first = class_name("com.a", "Item")
    second = class_name("com.b", "Item")
    table = ImportTable("com.x")
    table.register(first)
    table.register(second)
    assert render_type(first, table) == "Item"
    assert render_type(second, table) == "com.b.Item"
    assert table.imports() == ["com.a.Item"]


def test_import_table_reserves_own_class_name() -> None:
    table = ImportTable("com.x", {"Item"})
    table.register(class_name("com.b", "Item"))
    assert render_type(class_name("com.b", "Item"), table) == "com.b.Item"
    assert table.imports() == []


def test_same_package_type_yields_to_earlier_import() -> None:
    imported = class_name("com.b", "Item")
    local = class_name("com.x", "Item")
    table = ImportTable("com.x")
    table.register(imported)
    table.register(local)
    assert render_type(imported, table) == "Item"
    assert render_type(local, table) == "com.x.Item"


def test_unregistered_same_package_type_is_short() -> None:
    assert render_type(class_name("com.x", "Item"), ImportTable("com.x")) == "Item"


def test_render_import_block() -> None:
    out = render_import_block(["lombok.Data", "import java.util.List;", "lombok.Data"])
    assert out == "import java.util.List;\nimport lombok.Data;\n"
    assert render_import_block([]) == ""
