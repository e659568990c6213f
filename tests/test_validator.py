import dataclasses
import unittest
from concurrent.futures import ThreadPoolExecutor

from provider_schema import validator
from provider_schema.utils import UNDEFINED
from provider_schema.validator import (
    CombinatorError,
    FieldError,
    SchemaError,
    Type,
    ValidationResult,
)

SAMPLES = {
    "string":    "x",
    "number":    1.5,
    "boolean":   True,
    "object":    {"a": 1},
    "function":  len,
    "null":      None,
    "undefined": UNDEFINED,
}


class PrimitiveTests(unittest.TestCase):
    def test_each_tag_accepts_only_its_own_kind(self):
        for tag in SAMPLES:
            check = getattr(Type, tag)()
            for sample_tag, sample in SAMPLES.items():
                result = check(sample, "p")
                self.assertEqual(result.valid, tag == sample_tag, f"{tag} vs {sample_tag}")
                self.assertEqual(result.type_match, result.valid)
                self.assertEqual(result.type, tag)

    def test_failure_message_and_fields(self):
        result = Type.string()(5, "cfg.name")
        self.assertFalse(result.valid)
        self.assertEqual(len(result.errors), 1)
        err = result.errors[0]
        self.assertEqual(err.path, "cfg.name")
        self.assertEqual(err.message, 'cfg.name should be a "string", but "number" was given')
        self.assertEqual(err.value, 5)
        self.assertEqual(err.expected, "string")

    def test_null_is_not_an_object(self):
        result = Type.object()(None, "p")
        self.assertFalse(result.valid)
        self.assertIn('"null" was given', result.errors[0].message)

    def test_bool_is_not_a_number(self):
        self.assertFalse(Type.number()(True, "p").valid)
        self.assertTrue(Type.number()(0, "p").valid)

    def test_list_is_not_an_object(self):
        result = Type.object()([1, 2], "p")
        self.assertFalse(result.valid)
        self.assertIn('"array" was given', result.errors[0].message)


class ArrayTests(unittest.TestCase):
    def test_error_path_uses_index(self):
        result = Type.array(Type.string())(["a", 1, "c"], "list")
        self.assertFalse(result.valid)
        self.assertTrue(result.type_match)
        self.assertEqual([e.path for e in result.errors], ["list[1]"])
        self.assertEqual(result.type, "string[]")

    def test_errors_in_index_order(self):
        result = Type.array(Type.number())(["a", 1, None, "b"], "xs")
        self.assertEqual([e.path for e in result.errors], ["xs[0]", "xs[2]", "xs[3]"])

    def test_not_an_array(self):
        result = Type.array(Type.string())("abc", "list")
        self.assertFalse(result.valid)
        self.assertFalse(result.type_match)
        self.assertEqual(result.type, "array")
        self.assertEqual(result.errors[0].message, 'list should be an "array", but "string" was given')
        self.assertEqual(result.errors[0].expected, "array")

    def test_empty_array_reports_declared_element_type(self):
        result = Type.array(Type.union(Type.string(), Type.number()))([], "xs")
        self.assertTrue(result.valid)
        self.assertEqual(result.type, "(string | number)[]")

    def test_tuple_is_accepted(self):
        self.assertTrue(Type.array(Type.number())((1, 2), "xs").valid)

    def test_nested_arrays(self):
        result = Type.array(Type.array(Type.number()))([[1], [2, "x"]], "m")
        self.assertEqual([e.path for e in result.errors], ["m[1][1]"])


class SchemaTests(unittest.TestCase):
    def setUp(self):
        self.fields = {"name": Type.required(Type.string())}

    def test_extra_field_rejected(self):
        result = Type.schema(self.fields, False)({"name": "x", "extra": 1}, "doc")
        self.assertFalse(result.valid)
        self.assertEqual(len(result.errors), 1)
        err = result.errors[0]
        self.assertEqual(err.path, "doc.extra")
        self.assertEqual(err.expected, "never")
        self.assertEqual(err.message, "doc.extra is unexpected field")
        self.assertEqual(err.value, 1)

    def test_extra_field_allowed(self):
        result = Type.schema(self.fields, True)({"name": "x", "extra": 1}, "doc")
        self.assertTrue(result.valid)
        self.assertEqual(result.errors, ())

    def test_not_an_object(self):
        result = Type.schema(self.fields)(5, "doc")
        self.assertFalse(result.valid)
        self.assertFalse(result.type_match)
        self.assertEqual(result.errors[0].message, 'doc should be an "object", but "number" was given')
        self.assertEqual(result.errors[0].expected, "object")

    def test_missing_required_field(self):
        result = Type.schema(self.fields)({}, "doc")
        self.assertEqual(
            result.messages, ['doc.name is required, but "undefined" was given']
        )

    def test_null_required_field(self):
        result = Type.schema(self.fields)({"name": None}, "doc")
        self.assertEqual(result.messages, ['doc.name is required, but "null" was given'])

    def test_reports_every_field_in_declaration_order(self):
        check = Type.schema({
            "a": Type.required(Type.string()),
            "b": Type.required(Type.number()),
        })
        result = check({"b": "x", "a": 1, "c": True}, "doc")
        self.assertEqual([e.path for e in result.errors], ["doc.a", "doc.b", "doc.c"])

    def test_type_match_true_for_malformed_object(self):
        result = Type.schema(self.fields)({"name": 1}, "doc")
        self.assertFalse(result.valid)
        self.assertTrue(result.type_match)

    def test_type_is_field_map(self):
        check = Type.schema({"name": Type.required(Type.string()), "n": Type.optional(Type.number())})
        self.assertEqual(check({"name": "x"}, "doc").type, '{"name": "string", "n": "number"}')

    def test_deeply_nested_error_path(self):
        check = Type.schema({
            "level1": Type.required(Type.schema({
                "level2": Type.required(Type.schema({
                    "bad_field": Type.required(Type.string()),
                })),
            })),
        })
        result = check({"level1": {"level2": {"bad_field": 123}}}, "root")
        self.assertEqual([e.path for e in result.errors], ["root.level1.level2.bad_field"])


class PresenceTests(unittest.TestCase):
    def test_required(self):
        result = Type.required(Type.string())(UNDEFINED, "f")
        self.assertFalse(result.valid)
        self.assertFalse(result.type_match)
        self.assertEqual(result.type, "string")
        self.assertIsNone(result.errors[0].expected)

    def test_required_present_delegates(self):
        self.assertTrue(Type.required(Type.string())("x", "f").valid)
        self.assertFalse(Type.required(Type.string())(5, "f").valid)

    def test_optional(self):
        self.assertTrue(Type.optional(Type.string())(UNDEFINED, "f").valid)
        self.assertTrue(Type.optional(Type.string())(None, "f").valid)
        self.assertTrue(Type.optional(Type.string())("x", "f").valid)
        self.assertFalse(Type.optional(Type.string())(5, "f").valid)

    def test_optional_absent_reports_inner_type(self):
        result = Type.optional(Type.array(Type.string()))(UNDEFINED, "f")
        self.assertTrue(result.type_match)
        self.assertEqual(result.type, "string[]")

    def test_optional_schema_field_may_be_absent(self):
        check = Type.schema({"opts": Type.optional(Type.schema({"a": Type.required(Type.string())}))})
        self.assertTrue(check({}, "doc").valid)
        self.assertFalse(check({"opts": {}}, "doc").valid)

    def test_required_union_rejects_absent(self):
        check = Type.required(Type.union(Type.null(), Type.string()))
        self.assertFalse(check(None, "f").valid)
        self.assertTrue(check("x", "f").valid)


class UnionTests(unittest.TestCase):
    def setUp(self):
        self.check = Type.union(
            Type.schema({"a": Type.required(Type.string())}, False),
            Type.schema({"b": Type.required(Type.number())}, False),
        )

    def test_any_valid_branch_wins(self):
        result = self.check({"b": 3}, "v")
        self.assertTrue(result.valid)
        self.assertTrue(result.type_match)
        self.assertEqual(result.errors, ())

    def test_malformed_object_surfaces_branch_errors(self):
        result = self.check({"a": 5}, "v")
        self.assertFalse(result.valid)
        self.assertTrue(result.type_match)
        self.assertIn('v.a should be a "string", but "number" was given', result.messages)
        self.assertNotIn("v", [e.path for e in result.errors])

    def test_wrong_kind_gives_single_synthetic_error(self):
        result = self.check("not an object", "v")
        self.assertFalse(result.valid)
        self.assertFalse(result.type_match)
        self.assertEqual(len(result.errors), 1)
        err = result.errors[0]
        self.assertEqual(err.path, "v")
        self.assertEqual(err.expected, '{"a": "string"} | {"b": "number"}')
        self.assertEqual(
            err.message,
            'v should be a "({"a": "string"} | {"b": "number"})", but "string" was given',
        )

    def test_drops_errors_of_implausible_branches(self):
        check = Type.union(Type.string(), Type.schema({"name": Type.required(Type.string())}))
        result = check({"name": 1}, "c")
        self.assertEqual([e.path for e in result.errors], ["c.name"])

    def test_type_name_is_parenthesised_join(self):
        self.assertEqual(Type.union(Type.string(), Type.number())("x", "p").type, "(string | number)")
        self.assertEqual(Type.union(Type.string(), Type.number())(None, "p").type, "(string | number)")

    def test_duplicate_type_names_collapse(self):
        result = Type.union(Type.string(), Type.string())(1, "p")
        self.assertEqual(result.errors[0].expected, "string")

    def test_union_inside_array(self):
        result = Type.array(Type.union(Type.string(), Type.number()))(["a", 1, True], "l")
        self.assertEqual(len(result.errors), 1)
        self.assertEqual(result.errors[0].path, "l[2]")
        self.assertEqual(result.errors[0].expected, "string | number")


class ResultTests(unittest.TestCase):
    def test_inconsistent_result_is_rejected(self):
        with self.assertRaises(CombinatorError):
            ValidationResult(valid=True, type="x", type_match=True, errors=(FieldError("p", "m"),))
        with self.assertRaises(CombinatorError):
            ValidationResult(valid=False, type="x", type_match=False)

    def test_errors_normalised_to_tuple(self):
        result = ValidationResult(valid=False, type="x", type_match=False, errors=[FieldError("p", "m")])
        self.assertIsInstance(result.errors, tuple)

    def test_raise_for_errors(self):
        Type.string()("ok", "p").raise_for_errors()  # should not raise
        with self.assertRaisesRegex(SchemaError, "p should be a") as ctx:
            Type.string()(1, "p").raise_for_errors()
        self.assertEqual(len(ctx.exception.errors), 1)
        self.assertFalse(ctx.exception.result.valid)

    def test_validate_helper(self):
        self.assertTrue(validator.validate("x", Type.string()).valid)
        self.assertEqual(validator.validate(1, Type.string()).errors[0].path, "root")


class PurityTests(unittest.TestCase):
    def setUp(self):
        self.check = Type.schema({
            "items": Type.required(Type.array(Type.union(Type.string(), Type.schema({"n": Type.required(Type.number())})))),
        })
        self.value = {"items": ["a", {"n": "x"}, 3], "junk": 1}

    def test_idempotent(self):
        first = self.check(self.value, "doc")
        second = self.check(self.value, "doc")
        self.assertEqual(first, second)
        self.assertEqual(first.errors, second.errors)

    def test_concurrent_calls_agree(self):
        expected = self.check(self.value, "doc")
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: self.check(self.value, "doc"), range(32)))
        for result in results:
            self.assertEqual(result, expected)

    def test_validators_are_frozen(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            self.check.allow_extra_fields = True


class CombinatorErrorTests(unittest.TestCase):
    def test_non_validator_field(self):
        with self.assertRaises(CombinatorError):
            Type.schema({"a": "string"})

    def test_non_mapping_fields(self):
        with self.assertRaises(CombinatorError):
            Type.schema(["a"])

    def test_non_string_field_name(self):
        with self.assertRaises(CombinatorError):
            Type.schema({1: Type.string()})

    def test_empty_union(self):
        with self.assertRaises(CombinatorError):
            Type.union()

    def test_bad_inner_validators(self):
        for build in (Type.array, Type.required, Type.optional):
            with self.assertRaises(CombinatorError):
                build(str)

    def test_is_a_type_error(self):
        self.assertTrue(issubclass(CombinatorError, TypeError))
        self.assertTrue(issubclass(SchemaError, ValueError))


if __name__ == "__main__":
    unittest.main()
