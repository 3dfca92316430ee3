from __future__ import annotations

import itertools
import unittest

from contracts.tokens import PositionedToken, Row
from leather.processor import process_parts
from parsing.row_parser import parse_row, parse_rows, scan_row
from parsing.rules import ROW_FIELD_RULES, RowState, classify_token, split_material_code


def _row(*texts: str, row_id: str = "p001_r000000") -> Row:
    return Row(
        row_id=row_id,
        page_num=1,
        tokens=[PositionedToken(text=t, x=float(i * 40), y=100.0, width=30.0, height=8.0) for i, t in enumerate(texts)],
    )


class TestRowFieldRules(unittest.TestCase):
    def test_rule_order(self) -> None:
        self.assertEqual(
            [r.name for r in ROW_FIELD_RULES],
            ["material_code", "dimension_pair", "bare_integer", "description_fragment"],
        )

    def test_each_rule_in_isolation(self) -> None:
        cases = {
            "1cap/Negro": "material_code",
            "1VAQ": "material_code",
            "Forro/Rojo": "material_code",
            "300x400": "dimension_pair",
            "300 * 400": "dimension_pair",
            "12": "bare_integer",
            "Frente": "description_fragment",
            "x": "description_fragment",
            "--": "description_fragment",
            "-": None,
        }
        for text, expected in cases.items():
            with self.subTest(text=text):
                self.assertEqual(classify_token(RowState(), text), expected)

    def test_material_rule_only_fires_once(self) -> None:
        state = RowState()
        classify_token(state, "1cap/Negro")
        self.assertEqual(classify_token(state, "Forro/Rojo"), "description_fragment")
        self.assertEqual((state.material, state.color), ("1cap", "Negro"))

    def test_split_material_code(self) -> None:
        self.assertEqual(split_material_code("1cap/Negro/Mate"), ("1cap", "Negro/Mate"))
        self.assertEqual(split_material_code("1vaq / Cafe "), ("1vaq", "Cafe"))
        self.assertEqual(split_material_code("1cap-Negro"), ("1cap-Negro", ""))


class TestParseRow(unittest.TestCase):
    def test_material_and_description(self) -> None:
        part = parse_row(_row("1cap/Negro", "Frente"))
        assert part is not None
        self.assertEqual(part.material, "1cap")
        self.assertEqual(part.color, "Negro")
        self.assertEqual(part.description, "Frente")
        self.assertEqual(part.notes, "")
        self.assertEqual((part.width, part.height, part.quantity), (0, 0, 1))

    def test_page_number_row_is_discarded(self) -> None:
        self.assertIsNone(parse_row(_row("Page", "3")))

    def test_explicit_dimension_then_quantity(self) -> None:
        part = parse_row(_row("300x400", "2"))
        assert part is not None
        self.assertEqual((part.width, part.height, part.quantity), (300, 400, 2))
        self.assertEqual(part.material, "")

    def test_bare_numbers_become_width_height_quantity(self) -> None:
        part = parse_row(_row("500", "200", "3"))
        assert part is not None
        self.assertEqual((part.width, part.height, part.quantity), (500, 200, 3))

    def test_extra_bare_numbers_are_ignored(self) -> None:
        part = parse_row(_row("10", "20", "3", "99"))
        assert part is not None
        self.assertEqual((part.width, part.height, part.quantity), (10, 20, 3))

        part = parse_row(_row("300x400", "2", "7"))
        assert part is not None
        self.assertEqual(part.quantity, 2)

    def test_single_number_is_quantity(self) -> None:
        part = parse_row(_row("1cap/Negro", "Tapa", "4"))
        assert part is not None
        self.assertEqual((part.width, part.height, part.quantity), (0, 0, 4))

    def test_lone_number_without_material_is_discarded(self) -> None:
        self.assertIsNone(parse_row(_row("Total", "40")))

    def test_zero_quantity_defaults_to_one(self) -> None:
        part = parse_row(_row("300x400", "0"))
        assert part is not None
        self.assertEqual(part.quantity, 1)

    def test_second_dimension_token_goes_to_description(self) -> None:
        part = parse_row(_row("1vaq/Cafe", "300x400", "10x20", "2"))
        assert part is not None
        self.assertEqual((part.width, part.height, part.quantity), (300, 400, 2))
        self.assertEqual(part.description, "10x20")

    def test_dimension_inside_longer_token(self) -> None:
        part = parse_row(_row("1cap", "Pieza 300 X 400mm"))
        assert part is not None
        self.assertEqual((part.material, part.width, part.height), ("1cap", 300, 400))
        self.assertEqual(part.description, "")

    def test_case_insensitive_prefix_without_slash(self) -> None:
        part = parse_row(_row("1CAP-NEGRO", "Forro", "12"))
        assert part is not None
        self.assertEqual((part.material, part.color, part.quantity), ("1CAP-NEGRO", "", 12))

    def test_noise_tokens_skipped(self) -> None:
        part = parse_row(_row("1cap/Negro", "-", "  ", "Frente", ".", "Bolso"))
        assert part is not None
        self.assertEqual(part.description, "Frente Bolso")

    def test_tokens_are_trimmed(self) -> None:
        state = scan_row(_row("  300x400 ", " 2 "))
        self.assertTrue(state.dimensions_found)
        self.assertEqual(state.quantity, 2)

    def test_ids_come_from_factory(self) -> None:
        part = parse_row(_row("500", "200"), id_factory=lambda: "fixed-id")
        assert part is not None
        self.assertEqual(part.id, "fixed-id")

        a = parse_row(_row("500", "200"))
        b = parse_row(_row("500", "200"))
        assert a is not None and b is not None
        self.assertNotEqual(a.id, b.id)

    def test_odd_rows_never_raise(self) -> None:
        odd = [
            (),
            ("",),
            ("x*",),
            ("***",),
            ("1x",),
            ("99999999999999999999x1",),
            ("ñ", "é"),
            ("1cap/Negro", "9" * 5000),
            ("1vaq/Cafe", "9" * 400 + "x2"),
            ("9" * 400, "9" * 400, "9" * 400),
        ]
        for texts in odd:
            with self.subTest(texts=texts[:3]):
                part = parse_row(_row(*texts))
                process_parts([part] if part is not None else [])

    def test_oversized_digit_runs_are_not_numbers(self) -> None:
        part = parse_row(_row("1cap/Negro", "9" * 5000))
        assert part is not None
        self.assertEqual((part.width, part.height, part.quantity), (0, 0, 1))
        self.assertEqual(part.description, "9" * 5000)

        part = parse_row(_row("1cap/Negro", "9" * 400 + "x2", "3"))
        assert part is not None
        self.assertEqual((part.width, part.height, part.quantity), (0, 0, 3))

        part = parse_row(_row("1cap/Negro", "9" * 15 + "x2"))
        assert part is not None
        self.assertEqual((part.width, part.height), (999999999999999, 2))


class TestParseRows(unittest.TestCase):
    def test_accepted_and_discarded_counts(self) -> None:
        counter = itertools.count(1)
        rows = [
            _row("Material", "Descripción", "Cant.", row_id="p001_r000000"),
            _row("1cap/Negro", "Frente", "300x400", "2", row_id="p001_r000001"),
            _row("Página", "1", row_id="p001_r000002"),
            _row("1vaq/Cafe", "Correa", "1000", "50", row_id="p001_r000003"),
        ]
        result = parse_rows(rows, id_factory=lambda: f"part-{next(counter)}")

        self.assertEqual([p.id for p in result.parts], ["part-1", "part-2"])
        self.assertEqual([p.material for p in result.parts], ["1cap", "1vaq"])
        self.assertEqual(result.meta["counts"], {"rows_accepted": 2, "rows_discarded": 2})
        self.assertEqual(result.meta["discarded_row_ids"], ["p001_r000000", "p001_r000002"])


if __name__ == "__main__":
    unittest.main()
