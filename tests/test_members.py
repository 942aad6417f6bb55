from __future__ import annotations

import unittest
from decimal import Decimal
from enum import Enum
from pathlib import Path
from uuid import uuid4

import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from objectprinting.errors import UnsupportedMemberSelection
from objectprinting.members import (
    MemberSelection,
    ValueKind,
    classify,
    declared_type_of,
    is_numeric_type,
    iter_members,
)
from sample_types import Account, Athlete, Counter, Employee, Node, Point, SavingsAccount, Sensor


class Color(Enum):
    RED = "red"


class ClassifyTests(unittest.TestCase):
    def test_value_kinds(self) -> None:
        cases = [
            (None, ValueKind.NULL),
            (1, ValueKind.SCALAR),
            (Decimal("1.5"), ValueKind.SCALAR),
            ("text", ValueKind.SCALAR),
            (uuid4(), ValueKind.SCALAR),
            (Color.RED, ValueKind.SCALAR),
            (Path("a/b"), ValueKind.SCALAR),
            (int, ValueKind.SCALAR),
            ({"a": 1}, ValueKind.MAPPING),
            ([1], ValueKind.SEQUENCE),
            ({1}, ValueKind.SEQUENCE),
            (range(2), ValueKind.SEQUENCE),
            (Employee(name="Eve", salary=1.0), ValueKind.COMPOSITE),
            (Node(1), ValueKind.COMPOSITE),
            (Account("Bob", 1.0), ValueKind.COMPOSITE),
        ]
        for value, kind in cases:
            with self.subTest(value=value):
                self.assertIs(classify(value), kind)

    def test_numeric_types(self) -> None:
        for tp in (int, float, Decimal):
            self.assertTrue(is_numeric_type(tp))
        for tp in (bool, str, complex, None):
            self.assertFalse(is_numeric_type(tp))


class IterMembersTests(unittest.TestCase):
    def test_optional_annotations_are_unwrapped(self) -> None:
        members = iter_members(Athlete("Bob", 30, 1.85))
        self.assertEqual([m.name for m in members], ["name", "age", "height", "weight"])
        self.assertEqual([m.declared_type for m in members], [str, int, float, float])
        self.assertIsNone(members[-1].value)

    def test_forward_reference_annotation(self) -> None:
        child = iter_members(Node(1))[1]
        self.assertEqual(child.name, "child")
        self.assertIs(child.declared_type, Node)

    def test_class_annotation_overrides_runtime_type(self) -> None:
        members = {m.name: m for m in iter_members(Counter(True))}
        self.assertIs(members["count"].declared_type, int)
        self.assertIs(members["label"].declared_type, str)

    def test_private_attributes_are_not_members(self) -> None:
        names = [m.name for m in iter_members(Account("Bob", 1.0), MemberSelection.FIELDS)]
        self.assertEqual(names, ["owner"])

    def test_properties_follow_fields_base_class_first(self) -> None:
        members = iter_members(SavingsAccount("Ann", 2.0))
        self.assertEqual(
            [(m.name, m.kind) for m in members],
            [
                ("owner", "field"),
                ("balance", "property"),
                ("is_overdrawn", "property"),
                ("rate", "property"),
            ],
        )
        self.assertIs(members[1].declared_type, float)
        self.assertIs(members[3].declared_type, float)

    def test_property_values_are_read_on_demand(self) -> None:
        sensor = Sensor("thermo")
        members = iter_members(sensor)
        self.assertEqual([m.name for m in members], ["name", "reads", "reading"])
        self.assertIs(members[2].declared_type, float)
        self.assertEqual(sensor.reads, 0)
        with self.assertRaises(RuntimeError):
            members[2].load()
        self.assertEqual(sensor.reads, 1)

    def test_slots(self) -> None:
        members = iter_members(Point(1, 2))
        self.assertEqual([(m.name, m.value) for m in members], [("x", 1), ("y", 2)])

    def test_pydantic_base_properties_are_ignored(self) -> None:
        names = [m.name for m in iter_members(Employee(name="Eve", salary=1.0))]
        self.assertEqual(names, ["name", "salary", "tags"])

    def test_selection_parsing(self) -> None:
        self.assertIs(MemberSelection.parse("Fields"), MemberSelection.FIELDS)
        self.assertIs(MemberSelection.parse(MemberSelection.BOTH), MemberSelection.BOTH)
        with self.assertRaises(UnsupportedMemberSelection):
            MemberSelection.parse(MemberSelection(0))
        with self.assertRaises(UnsupportedMemberSelection):
            iter_members(Point(1, 2), 3)


class DeclaredTypeTests(unittest.TestCase):
    def test_declared_type_lookup(self) -> None:
        self.assertIs(declared_type_of(Athlete, "weight"), float)
        self.assertIs(declared_type_of(Account, "balance"), float)
        self.assertIs(declared_type_of(Employee, "salary"), float)
        self.assertIsNone(declared_type_of(Account, "owner"))
        self.assertIsNone(declared_type_of(Athlete, "missing"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
