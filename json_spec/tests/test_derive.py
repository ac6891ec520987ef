"""
Tests for structural derivation.
"""

import pytest

from json_spec import (
    DuplicateBinderError,
    DuplicatePropertyError,
    Environment,
    JsonArray,
    JsonBool,
    JsonDateTime,
    JsonEither,
    JsonInt,
    JsonLet,
    JsonNullable,
    JsonNum,
    JsonObject,
    JsonRef,
    JsonString,
    JsonTag,
    RecursionWrapper,
    SpecificationError,
    UnboundReferenceError,
    derive,
    json_structure,
    tagged,
)
from json_spec.structure import (
    BoolType,
    DecimalType,
    EitherType,
    FieldsType,
    IntType,
    ListType,
    MaybeType,
    TagType,
    TextType,
    TimestampType,
    UnitType,
)

LABELLED_TREE = JsonLet(
    [
        (
            "Tree",
            JsonObject([("label", JsonString()), ("children", JsonArray(JsonRef("Tree")))]),
        )
    ],
    JsonRef("Tree"),
)


class TestAtoms:
    @pytest.mark.parametrize(
        "spec,expected",
        [
            (JsonString(), TextType()),
            (JsonNum(), DecimalType()),
            (JsonInt(), IntType()),
            (JsonBool(), BoolType()),
            (JsonDateTime(), TimestampType()),
        ],
        ids=["string", "number", "integer", "boolean", "date-time"],
    )
    def test_atom(self, spec, expected):
        assert derive(Environment(), spec) == expected

    def test_atoms_are_distinct(self):
        assert json_structure(JsonNum()) != json_structure(JsonInt())


class TestObjects:
    def test_empty_object_is_unit(self):
        assert json_structure(JsonObject([])) == UnitType()

    def test_single_field(self):
        structure = json_structure(JsonObject([("a", JsonString())]))
        assert structure == FieldsType("a", TextType(), UnitType())

    def test_declaration_order_is_preserved(self):
        spec = JsonObject([("z", JsonInt()), ("a", JsonString()), ("m", JsonBool())])
        structure = json_structure(spec)
        assert structure.keys() == ["z", "a", "m"]
        assert structure == FieldsType(
            "z",
            IntType(),
            FieldsType("a", TextType(), FieldsType("m", BoolType(), UnitType())),
        )

    def test_rederiving_yields_same_order(self):
        spec = JsonObject([("b", JsonInt()), ("a", JsonInt())])
        first = derive(Environment(), spec)
        second = derive(Environment(), spec)
        assert first == second
        assert first.keys() == second.keys() == ["b", "a"]

    def test_duplicate_property_rejected(self):
        spec = JsonObject([("a", JsonString()), ("a", JsonInt())])
        with pytest.raises(DuplicatePropertyError) as exc_info:
            json_structure(spec)
        assert exc_info.value.source_path == "#/object"
        assert "'a'" in str(exc_info.value)

    def test_nested_duplicate_property_reports_path(self):
        spec = JsonObject([("outer", JsonObject([("x", JsonInt()), ("x", JsonInt())]))])
        with pytest.raises(DuplicatePropertyError) as exc_info:
            json_structure(spec)
        assert exc_info.value.source_path == "#/object/outer/object"


class TestCompound:
    def test_array(self):
        assert json_structure(JsonArray(JsonInt())) == ListType(IntType())

    def test_nullable(self):
        assert json_structure(JsonNullable(JsonString())) == MaybeType(TextType())

    def test_either(self):
        assert json_structure(JsonEither(JsonString(), JsonInt())) == EitherType(TextType(), IntType())

    def test_tag(self):
        assert json_structure(JsonTag("foo")) == TagType("foo")

    def test_tagged_union(self):
        spec = JsonEither(tagged("foo", JsonString()), tagged("bar", JsonInt()))
        structure = json_structure(spec)
        assert structure == EitherType(
            FieldsType("tag", TagType("foo"), FieldsType("content", TextType(), UnitType())),
            FieldsType("tag", TagType("bar"), FieldsType("content", IntType(), UnitType())),
        )


class TestLet:
    def test_let_shares_definition(self):
        vertex = JsonObject([("x", JsonInt()), ("y", JsonInt()), ("z", JsonInt())])
        spec = JsonLet(
            [("Vertex", vertex)],
            JsonObject(
                [
                    ("vertex1", JsonRef("Vertex")),
                    ("vertex2", JsonRef("Vertex")),
                    ("vertex3", JsonRef("Vertex")),
                ]
            ),
        )
        structure = json_structure(spec)
        vertex_structure = json_structure(vertex)
        assert [value for _, value in structure.fields()] == [vertex_structure] * 3

    def test_non_recursive_reference_is_not_wrapped(self):
        spec = JsonLet([("Name", JsonString())], JsonArray(JsonRef("Name")))
        assert json_structure(spec) == ListType(TextType())

    def test_recursion_terminates_with_wrapper(self):
        structure = json_structure(LABELLED_TREE)
        assert structure.keys() == ["label", "children"]

        children = dict(structure.fields())["children"]
        assert isinstance(children, ListType)
        assert isinstance(children.element, RecursionWrapper)
        assert children.element.name == "Tree"

    def test_wrapper_payload_is_binder_structure(self):
        structure = json_structure(LABELLED_TREE)
        wrapper = dict(structure.fields())["children"].element
        assert wrapper.resolved
        assert wrapper.payload == structure
        # The payload's own children refer back to the same wrapper
        assert dict(wrapper.payload.fields())["children"].element is wrapper

    def test_wrapper_scope_holds_self_reference(self):
        wrapper = dict(json_structure(LABELLED_TREE).fields())["children"].element
        assert wrapper.scope.lookup("Tree") is wrapper

    def test_direct_self_reference_through_array(self):
        spec = JsonLet([("Foo", JsonArray(JsonRef("Foo")))], JsonRef("Foo"))
        structure = json_structure(spec)
        assert isinstance(structure, ListType)
        assert isinstance(structure.element, RecursionWrapper)
        assert structure.element.payload == structure

    def test_earlier_sibling_is_visible_derived(self):
        spec = JsonLet(
            [
                ("Point", JsonObject([("x", JsonInt())])),
                ("Line", JsonObject([("start", JsonRef("Point")), ("end", JsonRef("Point"))])),
            ],
            JsonRef("Line"),
        )
        structure = json_structure(spec)
        point = FieldsType("x", IntType(), UnitType())
        assert structure.fields() == [("start", point), ("end", point)]

    def test_forward_sibling_is_wrapped(self):
        spec = JsonLet(
            [
                ("Line", JsonObject([("start", JsonRef("Point"))])),
                ("Point", JsonObject([("x", JsonInt())])),
            ],
            JsonRef("Line"),
        )
        structure = json_structure(spec)
        start = dict(structure.fields())["start"]
        assert isinstance(start, RecursionWrapper)
        assert start.name == "Point"
        assert start.payload == FieldsType("x", IntType(), UnitType())

    def test_mutual_recursion(self):
        spec = JsonLet(
            [
                ("Expr", JsonEither(JsonInt(), JsonRef("Sum"))),
                ("Sum", JsonObject([("terms", JsonArray(JsonRef("Expr")))])),
            ],
            JsonRef("Expr"),
        )
        structure = json_structure(spec)
        assert isinstance(structure, EitherType)
        assert structure.left == IntType()

        sum_wrapper = structure.right
        assert isinstance(sum_wrapper, RecursionWrapper)
        assert sum_wrapper.name == "Sum"

        # Sum comes after Expr, so it sees Expr already derived
        terms = dict(sum_wrapper.payload.fields())["terms"]
        assert terms.element == structure
        assert terms.element.right is sum_wrapper

    def test_body_sees_derived_structures(self):
        spec = JsonLet(
            [("A", JsonString()), ("B", JsonInt())],
            JsonObject([("a", JsonRef("A")), ("b", JsonRef("B"))]),
        )
        assert json_structure(spec) == FieldsType("a", TextType(), FieldsType("b", IntType(), UnitType()))

    def test_duplicate_binder_rejected(self):
        spec = JsonLet([("A", JsonString()), ("A", JsonInt())], JsonRef("A"))
        with pytest.raises(DuplicateBinderError) as exc_info:
            json_structure(spec)
        assert exc_info.value.source_path == "#/let"


class TestShadowing:
    def test_inner_binding_shadows_outer(self):
        spec = JsonLet(
            [("X", JsonString())],
            JsonObject(
                [
                    ("inner", JsonLet([("X", JsonInt())], JsonRef("X"))),
                    ("outer", JsonRef("X")),
                ]
            ),
        )
        structure = json_structure(spec)
        assert structure.fields() == [("inner", IntType()), ("outer", TextType())]

    def test_inner_binder_can_use_outer_binder(self):
        spec = JsonLet(
            [("Name", JsonString())],
            JsonLet([("Person", JsonObject([("name", JsonRef("Name"))]))], JsonRef("Person")),
        )
        assert json_structure(spec) == FieldsType("name", TextType(), UnitType())

    def test_inner_self_reference_shadows_outer_binder(self):
        spec = JsonLet(
            [("Node", JsonString())],
            JsonLet([("Node", JsonArray(JsonRef("Node")))], JsonRef("Node")),
        )
        structure = json_structure(spec)
        assert isinstance(structure.element, RecursionWrapper)

    def test_environment_argument_is_used(self):
        env = Environment().bind("External", IntType())
        assert derive(env, JsonArray(JsonRef("External"))) == ListType(IntType())


class TestUnboundReferences:
    def test_top_level_reference(self):
        with pytest.raises(UnboundReferenceError) as exc_info:
            json_structure(JsonRef("X"))
        assert exc_info.value.name == "X"
        assert exc_info.value.source_path == "#/ref"

    def test_reference_outside_let_scope(self):
        spec = JsonObject(
            [
                ("a", JsonLet([("X", JsonString())], JsonRef("X"))),
                ("b", JsonRef("X")),
            ]
        )
        with pytest.raises(UnboundReferenceError) as exc_info:
            json_structure(spec)
        assert exc_info.value.source_path == "#/object/b/ref"

    def test_unbound_reference_inside_binder(self):
        spec = JsonLet([("A", JsonArray(JsonRef("Missing")))], JsonRef("A"))
        with pytest.raises(SpecificationError) as exc_info:
            json_structure(spec)
        assert exc_info.value.source_path == "#/let/A/array/ref"


def test_json_structure_is_cached():
    assert json_structure(LABELLED_TREE) is json_structure(LABELLED_TREE)
