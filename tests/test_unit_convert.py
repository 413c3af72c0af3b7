from __future__ import annotations

import unittest

from unit_convert.contracts import (
    ConvertConfig,
    InvalidUnitError,
    InvalidValueError,
    SameUnitError,
    SameUnitPolicy,
    Unit,
    UnitTable,
    UnknownTableError,
)
from unit_convert.module import convert, format_quantity, run_unit_conversion
from unit_convert.tables import DATA_STORAGE, LENGTH, get_table, list_tables


class TestConvert(unittest.TestCase):
    def test_known_factors(self) -> None:
        self.assertEqual(convert("kibibyte", "byte", 1, table=DATA_STORAGE), 1024)
        self.assertEqual(convert("byte", "bit", 1, table=DATA_STORAGE), 8)
        self.assertAlmostEqual(convert("foot", "meter", 1, table=LENGTH), 0.3048)
        self.assertAlmostEqual(convert("mile", "kilometer", 1, table=LENGTH), 1.609344)

    def test_round_trip_every_pair(self) -> None:
        for table_name in list_tables():
            table = get_table(table_name)
            for a in table.codes():
                for b in table.codes():
                    if a == b:
                        continue
                    for v in (0, 1, 3.5, 1234.0):
                        there = convert(a, b, v, table=table)
                        back = convert(b, a, there, table=table)
                        self.assertAlmostEqual(back, v, delta=1e-9 * max(1.0, v), msg=f"{table_name}:{a}<->{b}")

    def test_same_unit_rejected_by_default(self) -> None:
        with self.assertRaises(SameUnitError):
            convert("byte", "byte", 5, table=DATA_STORAGE)

    def test_same_unit_identity_policy(self) -> None:
        for v in (0, 1, 2.5, 1e30):
            self.assertEqual(
                convert("meter", "meter", v, table=LENGTH, same_unit=SameUnitPolicy.IDENTITY), v
            )

    def test_unknown_unit(self) -> None:
        with self.assertRaises(InvalidUnitError):
            convert("furlong", "meter", 1, table=LENGTH)
        with self.assertRaises(InvalidUnitError):
            convert("meter", "furlong", 1, table=LENGTH)

    def test_invalid_values(self) -> None:
        for bad in (-1, float("nan"), float("inf"), True, "3"):
            with self.assertRaises(InvalidValueError, msg=repr(bad)):
                convert("meter", "foot", bad, table=LENGTH)  # type: ignore[arg-type]

    def test_zero_is_allowed(self) -> None:
        self.assertEqual(convert("meter", "foot", 0, table=LENGTH), 0)


class TestTables(unittest.TestCase):
    def test_every_table_contains_its_base(self) -> None:
        for name in list_tables():
            table = get_table(name)
            self.assertEqual(name, table.name)
            self.assertEqual(table.get(table.base_code).to_base, 1)

    def test_unknown_table(self) -> None:
        with self.assertRaises(UnknownTableError):
            get_table("temperature")

    def test_table_validation(self) -> None:
        with self.assertRaises(ValueError):
            Unit("zero", "Zero", 0)
        with self.assertRaises(ValueError):
            UnitTable(name="t", base_code="a", units=(Unit("b", "B", 1),))
        with self.assertRaises(ValueError):
            UnitTable(name="t", base_code="a", units=(Unit("a", "A", 1), Unit("a", "A2", 2)))


class TestFormatQuantity(unittest.TestCase):
    def test_bands(self) -> None:
        self.assertEqual(format_quantity(0), "0")
        self.assertEqual(format_quantity(1.234567e-7), "1.234567e-7")
        self.assertEqual(format_quantity(0.5), "0.5")
        self.assertEqual(format_quantity(0.3048), "0.3048")
        self.assertEqual(format_quantity(8.0), "8")
        self.assertEqual(format_quantity(1.609344), "1.609344")
        self.assertEqual(format_quantity(1024.0), "1,024")
        self.assertEqual(format_quantity(1234567.891), "1,234,567.891")


class TestRunUnitConversion(unittest.TestCase):
    def test_ok_result_has_display(self) -> None:
        result = run_unit_conversion(
            config=ConvertConfig(table="data_storage", from_code="kibibyte", to_code="byte", value=2)
        )
        self.assertTrue(result.ok)
        self.assertEqual(result.value, 2048)
        self.assertEqual(result.display, "2,048 Byte (B)")
        self.assertEqual(result.errors, [])

    def test_errors_are_returned_not_raised(self) -> None:
        cases = {
            "INVALID_UNIT": ConvertConfig(table="length", from_code="x", to_code="meter", value=1),
            "SAME_UNIT": ConvertConfig(table="length", from_code="meter", to_code="meter", value=1),
            "INVALID_VALUE": ConvertConfig(table="length", from_code="foot", to_code="meter", value=-2),
            "UNKNOWN_TABLE": ConvertConfig(table="nope", from_code="a", to_code="b", value=1),
        }
        for code, config in cases.items():
            result = run_unit_conversion(config=config)
            self.assertFalse(result.ok)
            self.assertIsNone(result.value)
            self.assertEqual([e.code for e in result.errors], [code])

    def test_to_dict_is_json_shaped(self) -> None:
        result = run_unit_conversion(
            config=ConvertConfig(table="length", from_code="foot", to_code="inch", value=1)
        )
        d = result.to_dict()
        self.assertEqual(d["ok"], True)
        self.assertAlmostEqual(d["value"], 12.0)


if __name__ == "__main__":
    unittest.main()
