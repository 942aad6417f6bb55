from __future__ import annotations

import unittest
from pathlib import Path

import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from objectprinting import ConfigurationRegistry, InvalidConfiguration, PrintingConfig
from objectprinting.builder import member_name
from sample_types import Account, Athlete, Node, Person


class MemberSelectorTests(unittest.TestCase):
    def test_names_and_attribute_lambdas(self) -> None:
        self.assertEqual(member_name("age"), "age")
        self.assertEqual(member_name(lambda p: p.age), "age")

    def test_non_member_access_is_rejected(self) -> None:
        selectors = [
            lambda p: p.age + 1,
            lambda p: p.child.value,
            lambda p: p,
            lambda p: 42,
            "not a name",
            42,
        ]
        for selector in selectors:
            with self.subTest(selector=selector):
                with self.assertRaises(InvalidConfiguration):
                    member_name(selector)


class PrintingConfigTests(unittest.TestCase):
    def test_excluding_a_member(self) -> None:
        config = PrintingConfig(Person).excluding(lambda p: p.age)
        self.assertEqual(config.print_to_string(Person("Alice", 30)), "Person\n\tname = Alice\n")

    def test_excluding_a_type(self) -> None:
        config = PrintingConfig(Node).excluding(int)
        self.assertEqual(config.print_to_string(Node(1)), "Node\n\tchild = null\n")

    def test_type_and_member_formatters_chain(self) -> None:
        config = (
            PrintingConfig(Person)
            .printing(int).using(lambda value: f"<{value}>")
            .printing(lambda p: p.name).using(str.upper)
        )
        self.assertEqual(
            config.print_to_string(Person("Alice", 30)),
            "Person\n\tname = ALICE\n\tage = <30>\n",
        )

    def test_member_formatter_wins_over_type_formatter(self) -> None:
        config = (
            PrintingConfig(Person)
            .printing("age").using(lambda value: "thirty")
            .printing(int).using(hex)
        )
        self.assertIn("\tage = thirty\n", config.print_to_string(Person("Alice", 30)))

    def test_member_culture_uses_declared_type(self) -> None:
        config = PrintingConfig(Athlete).printing(lambda a: a.height).using(culture="de_DE")
        self.assertIsNotNone(config.registry.numeric_culture(float))
        output = config.print_to_string(Athlete("Bob", 30, 1.85))
        self.assertIn("\theight = 1,85\n", output)
        self.assertIn("\tage = 30\n", output)

    def test_property_culture(self) -> None:
        config = PrintingConfig(Account).printing(lambda a: a.balance).using(culture="fr_FR")
        self.assertIn("\tbalance = 12,5\n", config.print_to_string(Account("Bob", 12.5)))

    def test_culture_on_non_numeric_member_is_rejected(self) -> None:
        with self.assertRaises(InvalidConfiguration):
            PrintingConfig(Person).printing(lambda p: p.name).using(culture="de_DE")

    def test_culture_without_declared_type_is_rejected(self) -> None:
        with self.assertRaises(InvalidConfiguration):
            PrintingConfig().printing("height").using(culture="de_DE")

    def test_using_requires_exactly_one_rule(self) -> None:
        pending = PrintingConfig(Athlete).printing(float)
        with self.assertRaises(InvalidConfiguration):
            pending.using()
        with self.assertRaises(InvalidConfiguration):
            pending.using(str, culture="de_DE")

    def test_shared_registry(self) -> None:
        registry = ConfigurationRegistry()
        config = PrintingConfig(Person, registry=registry).excluding("name")
        self.assertIs(config.registry, registry)
        self.assertEqual(registry.excluded_properties, frozenset({"name"}))

    def test_print_options_are_forwarded(self) -> None:
        config = PrintingConfig(Node)
        output = config.print_to_string(Node(1, Node(2)), indent_char="-", max_depth=1)
        self.assertEqual(output, "Node\n-value = <max depth reached>\n-child = <max depth reached>\n")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
