from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from delimited_text.artifacts import serialize_records
from delimited_text.contracts import (
    DuplicateHeaderError,
    DuplicateHeaderPolicy,
    InsufficientRowsError,
    ParseConfig,
)
from delimited_text.module import parse, run_tsv_to_json, sniff_cell


class TestParse(unittest.TestCase):
    def test_typed_records(self) -> None:
        records = parse("name\tage\nAlice\t30\nBob\t25")
        self.assertEqual(records, [{"name": "Alice", "age": 30.0}, {"name": "Bob", "age": 25.0}])
        self.assertIsInstance(records[0]["age"], float)
        self.assertEqual(
            json.loads(serialize_records(records)),
            [{"name": "Alice", "age": 30}, {"name": "Bob", "age": 25}],
        )

    def test_booleans(self) -> None:
        self.assertEqual(parse("active\nfalse\ntrue"), [{"active": False}, {"active": True}])

    def test_header_only_is_insufficient(self) -> None:
        for text in ("a\tb", "a\tb\n", "", "   \n  "):
            with self.assertRaises(InsufficientRowsError, msg=repr(text)):
                parse(text)

    def test_missing_and_extra_cells(self) -> None:
        self.assertEqual(parse("a\tb\nx\n"), [{"a": "x", "b": ""}])
        self.assertEqual(parse("a\nx\ty\tz"), [{"a": "x"}])

    def test_cells_and_headers_are_trimmed(self) -> None:
        self.assertEqual(parse(" a \t b\n 1 \t hi "), [{"a": 1.0, "b": "hi"}])

    def test_field_order_follows_header(self) -> None:
        records = parse("z\ty\tx\n1\t2\t3")
        self.assertEqual(list(records[0]), ["z", "y", "x"])

    def test_custom_delimiter(self) -> None:
        self.assertEqual(parse("a,b\n1,two", delimiter=","), [{"a": 1.0, "b": "two"}])


class TestSniffCell(unittest.TestCase):
    def test_order_and_types(self) -> None:
        cases = {
            "true": True,
            "false": False,
            "42": 42.0,
            "-3.5": -3.5,
            ".5": 0.5,
            "5.": 5.0,
            "1e3": 1000.0,
            "0x1F": 31.0,
            "0b101": 5.0,
            "": "",
            "True": "True",
            "abc": "abc",
            "12abc": "12abc",
            "Infinity": "Infinity",
            "1e999": "1e999",
            "1_000": "1_000",
        }
        for raw, expected in cases.items():
            got = sniff_cell(raw)
            self.assertEqual(got, expected, msg=repr(raw))
            self.assertIs(type(got), type(expected), msg=repr(raw))


class TestDuplicateHeaders(unittest.TestCase):
    TEXT = "id\tname\tname\n1\tfirst\tsecond"

    def test_overwrite_keeps_first_position_last_value(self) -> None:
        self.assertEqual(parse(self.TEXT), [{"id": 1.0, "name": "second"}])

    def test_reject(self) -> None:
        with self.assertRaises(DuplicateHeaderError):
            parse(self.TEXT, duplicate_headers=DuplicateHeaderPolicy.REJECT)

    def test_rename(self) -> None:
        records = parse(
            "a\ta\ta_2\ta\n1\t2\t3\t4", duplicate_headers=DuplicateHeaderPolicy.RENAME
        )
        self.assertEqual(records, [{"a": 1.0, "a_3": 2.0, "a_2": 3.0, "a_4": 4.0}])


class TestSerialize(unittest.TestCase):
    def test_indent_options(self) -> None:
        records = [{"a": 1.0, "b": "x", "c": True, "d": 0.25}]
        self.assertEqual(serialize_records(records, indent=0), '[{"a":1,"b":"x","c":true,"d":0.25}]')
        self.assertIn('\n        "a": 1', serialize_records(records, indent=4))
        with self.assertRaises(ValueError):
            serialize_records(records, indent=3)

    def test_non_ascii_kept(self) -> None:
        self.assertEqual(serialize_records([{"ville": "Zürich"}], indent=0), '[{"ville":"Zürich"}]')


class TestRunTsvToJson(unittest.TestCase):
    def test_file_round(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "in.tsv"
            src.write_text("name\tage\nAlice\t30\n", encoding="utf-8")
            result = run_tsv_to_json(config=ParseConfig(input_file=src, indent=0))
        self.assertTrue(result.ok)
        self.assertEqual(result.json_text, '[{"name":"Alice","age":30}]')
        assert result.stats is not None
        self.assertEqual((result.stats.rows, result.stats.columns), (1, 2))
        self.assertEqual(result.stats.output_bytes, len(result.json_text.encode("utf-8")))

    def test_errors_reported(self) -> None:
        missing = run_tsv_to_json(config=ParseConfig(input_file=Path("/nonexistent/in.tsv")))
        self.assertEqual([e.code for e in missing.errors], ["INPUT_NOT_FOUND"])

        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "in.tsv"
            src.write_text("only_header\n", encoding="utf-8")
            result = run_tsv_to_json(config=ParseConfig(input_file=src))
        self.assertFalse(result.ok)
        self.assertEqual(result.records, [])
        self.assertIsNone(result.json_text)
        self.assertEqual([e.code for e in result.errors], ["INSUFFICIENT_ROWS"])

    def test_latin1_file_is_reported(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "export.tsv"
            src.write_bytes(b"name\tcity\nJos\xe9\tK\xf6ln\n")
            result = run_tsv_to_json(config=ParseConfig(input_file=src))
        self.assertFalse(result.ok)
        self.assertEqual(result.records, [])
        self.assertEqual([e.code for e in result.errors], ["INPUT_NOT_UTF8"])
        assert result.errors[0].detail is not None
        self.assertEqual(result.errors[0].detail["byte_offset"], 13)

    def test_bom_is_not_part_of_first_header(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "excel.tsv"
            src.write_bytes("\ufeffname\tage\nAlice\t30\n".encode("utf-8"))
            result = run_tsv_to_json(config=ParseConfig(input_file=src, indent=0))
        self.assertTrue(result.ok)
        self.assertEqual(result.records, [{"name": "Alice", "age": 30.0}])

    def test_config_validation(self) -> None:
        with self.assertRaises(ValueError):
            ParseConfig(input_file=Path("x.tsv"), delimiter="ab")
        with self.assertRaises(ValueError):
            ParseConfig(input_file=Path("x.tsv"), indent=8)
        with self.assertRaises(TypeError):
            ParseConfig(input_file="x.tsv")  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
