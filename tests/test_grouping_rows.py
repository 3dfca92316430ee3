from __future__ import annotations

import json
import random
import unittest

from contracts.tokens import PositionedToken, TokenPage
from grouping.config import RowGroupingConfig
from grouping.group_rows import group_page_tokens, group_tokens_into_rows


def _tok(text: str, x: float, y: float) -> PositionedToken:
    return PositionedToken(text=text, x=x, y=y, width=10.0, height=8.0)


class TestRowGrouping(unittest.TestCase):
    def test_rows_top_to_bottom_and_left_to_right(self) -> None:
        tokens = [
            _tok("D", 50, 681),
            _tok("B", 100, 702),
            _tok("C", 10, 680),
            _tok("A", 10, 700),
        ]
        rows = group_tokens_into_rows(tokens)

        self.assertEqual([[t.text for t in r.tokens] for r in rows], [["A", "B"], ["C", "D"]])
        self.assertEqual([r.row_id for r in rows], ["p001_r000000", "p001_r000001"])
        self.assertEqual(rows[0].text, "A B")

    def test_row_membership_is_measured_from_first_token(self) -> None:
        # 710 -> 706 -> 702: each step is within tolerance, but 702 is 8 units
        # below the row's first token and must start a new row.
        tokens = [_tok("c", 100, 702), _tok("a", 0, 710), _tok("b", 50, 706)]
        rows = group_tokens_into_rows(tokens)

        self.assertEqual([[t.text for t in r.tokens] for r in rows], [["a", "b"], ["c"]])

    def test_tolerance_boundary_is_exclusive(self) -> None:
        rows = group_tokens_into_rows([_tok("top", 0, 105), _tok("low", 10, 100)])
        self.assertEqual(len(rows), 2)

        rows = group_tokens_into_rows([_tok("top", 0, 104.9), _tok("low", 10, 100)])
        self.assertEqual(len(rows), 1)

    def test_custom_tolerance(self) -> None:
        tokens = [_tok("a", 0, 100), _tok("b", 10, 92)]
        self.assertEqual(len(group_tokens_into_rows(tokens)), 2)
        self.assertEqual(len(group_tokens_into_rows(tokens, config=RowGroupingConfig(row_y_tolerance=10.0))), 1)

    def test_invalid_tolerance_rejected(self) -> None:
        with self.assertRaises(ValueError):
            RowGroupingConfig(row_y_tolerance=0)
        with self.assertRaises(ValueError):
            RowGroupingConfig(row_y_tolerance=float("nan"))

    def test_empty_and_whitespace_input(self) -> None:
        self.assertEqual(group_tokens_into_rows([]), [])
        self.assertEqual(group_tokens_into_rows([_tok("  ", 0, 0), _tok("", 5, 5)]), [])

    def test_grouping_is_deterministic_and_ordered(self) -> None:
        rng = random.Random(7)
        tokens = []
        for line in range(12):
            base_y = 800 - line * 20
            for col in range(6):
                tokens.append(_tok(f"t{line}_{col}", col * 60 + rng.uniform(0, 5), base_y + rng.uniform(-2, 2)))
        rng.shuffle(tokens)

        r1 = [r.to_dict() for r in group_tokens_into_rows(tokens, page_num=3)]
        r2 = [r.to_dict() for r in group_tokens_into_rows(list(tokens), page_num=3)]
        self.assertEqual(json.dumps(r1, sort_keys=True), json.dumps(r2, sort_keys=True))

        rows = group_tokens_into_rows(tokens, page_num=3)
        self.assertEqual(len(rows), 12)
        for r in rows:
            xs = [t.x for t in r.tokens]
            self.assertEqual(xs, sorted(xs))
            self.assertEqual(len({t.text.split("_")[0] for t in r.tokens}), 1)
        tops = [max(t.y for t in r.tokens) for r in rows]
        self.assertEqual(tops, sorted(tops, reverse=True))
        self.assertTrue(all(r.row_id.startswith("p003_r") for r in rows))

    def test_page_result_reports_dropped_tokens(self) -> None:
        page = TokenPage(
            page_num=2,
            tokens=[
                _tok("1cap/Negro", 10, 500),
                _tok("   ", 40, 500),
                PositionedToken(text="bad", x=float("nan"), y=500.0, width=1.0, height=1.0),
                _tok("Frente", 80, 501),
            ],
        )
        result = group_page_tokens(page)

        self.assertEqual(len(result.rows), 1)
        self.assertEqual([t.text for t in result.rows[0].tokens], ["1cap/Negro", "Frente"])
        self.assertEqual(result.meta["counts"], {"tokens_in": 4, "tokens_used": 2, "rows": 1})
        self.assertEqual(
            result.meta["dropped_tokens"],
            [{"token_index": 1, "reason": "WHITESPACE"}, {"token_index": 2, "reason": "NON_FINITE_GEOMETRY"}],
        )


if __name__ == "__main__":
    unittest.main()
