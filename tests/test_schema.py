import unittest
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple, Union
from collections.abc import MutableSequence, Sequence
import datetime
import uuid

from propmap.schema.descriptors import (
    PropertyKind, classify, clear_schema_cache, describe, find_property, instantiate, is_zero,
    matches_runtime_type, normalize_type, unwrap_optional, zero_value,
)
from tests.models import Account, Badge, ContactDetails, Person, PersonalDetails, Status, Thermostat


class TestClassify(unittest.TestCase):
    def test_leaf_kinds(self):
        self.assertEqual(classify(int), PropertyKind.SCALAR)
        self.assertEqual(classify(bool), PropertyKind.SCALAR)
        self.assertEqual(classify(float), PropertyKind.SCALAR)
        self.assertEqual(classify(str), PropertyKind.TEXT)
        self.assertEqual(classify(bytes), PropertyKind.TEXT)
        self.assertEqual(classify(Decimal), PropertyKind.DECIMAL)
        self.assertEqual(classify(Status), PropertyKind.ENUM)
        self.assertEqual(classify(datetime.datetime), PropertyKind.VALUE)
        self.assertEqual(classify(uuid.UUID), PropertyKind.VALUE)
        self.assertEqual(classify(Any), PropertyKind.VALUE)
        self.assertEqual(classify(object), PropertyKind.VALUE)

    def test_collections_and_arrays(self):
        self.assertEqual(classify(List[int]), PropertyKind.COLLECTION)
        self.assertEqual(classify(list[ContactDetails]), PropertyKind.COLLECTION)
        self.assertEqual(classify(Dict[str, int]), PropertyKind.COLLECTION)
        self.assertEqual(classify(list), PropertyKind.COLLECTION)
        self.assertEqual(classify(MutableSequence), PropertyKind.COLLECTION)
        self.assertEqual(classify(Sequence[int]), PropertyKind.COLLECTION)
        self.assertEqual(classify(Tuple[int, ...]), PropertyKind.ARRAY)
        self.assertEqual(classify(tuple), PropertyKind.ARRAY)

    def test_containers(self):
        self.assertEqual(classify(ContactDetails), PropertyKind.CONTAINER)
        self.assertEqual(classify(Optional[ContactDetails]), PropertyKind.CONTAINER)
        self.assertEqual(classify(Union[ContactDetails, Person]), PropertyKind.VALUE)

    def test_unwrap_and_normalize(self):
        self.assertEqual(unwrap_optional(Optional[int]), (int, True))
        self.assertEqual(unwrap_optional(int), (int, False))
        self.assertEqual(unwrap_optional(ContactDetails | None), (ContactDetails, True))
        self.assertEqual(normalize_type(List[int]), list[int])
        self.assertEqual(normalize_type(Tuple[int, ...]), tuple[int, ...])
        self.assertIs(normalize_type(List), list)


class TestDescribe(unittest.TestCase):
    def test_dataclass_fields_in_order(self):
        names = [d.name for d in describe(PersonalDetails)]
        self.assertEqual(names, ["first_name", "last_name", "contact", "parent_details", "friends"])
        contact = find_property(PersonalDetails, "contact")
        self.assertIs(contact.declared_type, ContactDetails)
        self.assertTrue(contact.nullable)
        self.assertTrue(contact.is_container)
        self.assertEqual(find_property(PersonalDetails, "friends").declared_type, tuple[PersonalDetails, ...])

    def test_skips_private_and_classvar(self):
        names = [d.name for d in describe(Account)]
        self.assertEqual(names, ["login", "status", "balance", "retries"])

    def test_cached_per_type(self):
        first = describe(ContactDetails)
        self.assertIs(first, describe(ContactDetails))
        clear_schema_cache()
        again = describe(ContactDetails)
        self.assertIsNot(first, again)
        self.assertEqual(first, again)

    def test_properties(self):
        by_name = {d.name: d for d in describe(Thermostat)}
        self.assertEqual(set(by_name), {"celsius", "fahrenheit"})
        self.assertTrue(by_name["celsius"].writable)
        self.assertFalse(by_name["fahrenheit"].writable)
        t = Thermostat()
        by_name["celsius"].set(t, 30.0)
        self.assertEqual(by_name["fahrenheit"].get(t), 86.0)

    def test_frozen_dataclass_is_read_only(self):
        self.assertFalse(find_property(Badge, "code").writable)

    def test_leaf_types_have_no_schema(self):
        self.assertEqual(describe(int), ())
        self.assertEqual(describe(list), ())
        self.assertEqual(describe(Decimal), ())


class TestZeroValues(unittest.TestCase):
    def test_zero_value(self):
        self.assertEqual(zero_value(int), 0)
        self.assertIs(zero_value(bool), False)
        self.assertEqual(zero_value(Decimal), Decimal(0))
        self.assertIs(zero_value(Status), Status.INACTIVE)
        self.assertIsNone(zero_value(Optional[int]))
        self.assertIsNone(zero_value(str))
        self.assertIsNone(zero_value(ContactDetails))

    def test_is_zero(self):
        self.assertTrue(is_zero(find_property(ContactDetails, "some_int"), 0))
        self.assertFalse(is_zero(find_property(ContactDetails, "some_int"), 3))
        self.assertTrue(is_zero(find_property(Account, "status"), Status.INACTIVE))
        self.assertFalse(is_zero(find_property(Account, "retries"), 0))
        self.assertFalse(is_zero(find_property(ContactDetails, "cell_number"), ""))

    def test_instantiate_fills_required_fields(self):
        acct = instantiate(Account)
        self.assertIsNone(acct.login)
        self.assertIs(acct.status, Status.INACTIVE)
        self.assertIsInstance(instantiate(ContactDetails), ContactDetails)


class TestRuntimeMatching(unittest.TestCase):
    def test_plain_types_match_by_identity(self):
        self.assertTrue(matches_runtime_type(ContactDetails, ContactDetails()))
        self.assertFalse(matches_runtime_type(ContactDetails, Person()))
        self.assertFalse(matches_runtime_type(int, True))

    def test_collections_match_elements(self):
        self.assertTrue(matches_runtime_type(list[str], ["a", "b"]))
        self.assertFalse(matches_runtime_type(list[str], ["a", 1]))
        self.assertTrue(matches_runtime_type(list[str], []))
        self.assertFalse(matches_runtime_type(list[str], ("a",)))
        self.assertTrue(matches_runtime_type(tuple[PersonalDetails, ...], (PersonalDetails(),)))
        self.assertTrue(matches_runtime_type(dict[str, int], {"a": 1}))
        self.assertFalse(matches_runtime_type(dict[str, int], {"a": "b"}))
        self.assertTrue(matches_runtime_type(list, [1, "x"]))


if __name__ == '__main__':
    unittest.main()
