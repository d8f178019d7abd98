from __future__ import annotations

import unittest

from hocr_grid_assembler.config import CenterUpdate, GridConfig
from hocr_grid_assembler.errors import InvalidInput
from hocr_grid_assembler.grid_builder import assemble, cells_to_rows, join_cell, word_centers
from hocr_grid_assembler.spatial import BBox, RecognizedWord, WordCenter

LINES = [50, 150, 250, 350]
WORDS_16 = [
    "APPLE", "ORANGE", "BANANA", "GRAPE",
    "RED", "GREEN", "BLUE", "YELLOW",
    "CAT", "DOG", "BIRD", "FISH",
    "NORTH", "SOUTH", "EAST", "WEST",
]


def word_at(text: str, x: float, y: float, half_w: float = 20, half_h: float = 10) -> RecognizedWord:
    return RecognizedWord(text=text, bbox=BBox(x - half_w, y - half_h, x + half_w, y + half_h))


def perfect_grid(texts=WORDS_16):
    return [word_at(texts[r * 4 + c], LINES[c], LINES[r]) for r in range(4) for c in range(4)]


class TestAssemble(unittest.TestCase):
    def test_empty_input_gives_sixteen_blanks(self) -> None:
        self.assertEqual(assemble([]), [""] * 16)

    def test_perfect_grid_row_major(self) -> None:
        self.assertEqual(assemble(perfect_grid()), WORDS_16)

    def test_input_order_is_irrelevant(self) -> None:
        words = list(reversed(perfect_grid()))
        self.assertEqual(assemble(words), WORDS_16)

    def test_mean_strategy_on_perfect_grid(self) -> None:
        config = GridConfig(center_update=CenterUpdate.MEAN)
        self.assertEqual(assemble(perfect_grid(), config), WORDS_16)

    def test_two_words_in_one_cell_join_left_to_right(self) -> None:
        words = [w for w in perfect_grid() if w.text != "APPLE"]
        # YORK listed first: the output must still read left to right
        words.insert(0, RecognizedWord("YORK", BBox(65, 40, 95, 60)))
        words.insert(0, RecognizedWord("NEW", BBox(30, 40, 60, 60)))
        words.reverse()
        cells = assemble(words)
        self.assertEqual(cells[0], "NEW YORK")
        self.assertEqual(cells[1:], WORDS_16[1:])

    def test_missing_word_leaves_blank_cell(self) -> None:
        words = [w for w in perfect_grid() if w.text != "BANANA"]
        cells = assemble(words)
        self.assertEqual(cells[2], "")
        expected = list(WORDS_16)
        expected[2] = ""
        self.assertEqual(cells, expected)

    def test_noisy_coordinates_still_land_in_right_cells(self) -> None:
        words = []
        for i, text in enumerate(WORDS_16):
            r, c = divmod(i, 4)
            dx = (i * 5 % 7) - 3
            dy = (i * 3 % 7) - 3
            words.append(word_at(text, LINES[c] + dx, LINES[r] + dy))
        self.assertEqual(assemble(words), WORDS_16)

    def test_irregular_word_widths(self) -> None:
        texts = list(WORDS_16)
        texts[0], texts[1], texts[2] = "I", "EXTRAORDINARY", "AM"
        words = perfect_grid(texts)
        words[0] = word_at("I", 50, 50, half_w=4)
        words[1] = word_at("EXTRAORDINARY", 150, 50, half_w=45)
        cells = assemble(words)
        self.assertEqual(cells[:3], ["I", "EXTRAORDINARY", "AM"])

    def test_texts_are_trimmed_and_single_spaced(self) -> None:
        words = [w for w in perfect_grid() if w.text != "APPLE"]
        words.append(word_at("  TRIMMED  ", 45, 50, half_w=5))
        words.append(word_at("   ", 52, 50, half_w=2))
        words.append(word_at(" TEXT", 58, 50, half_w=5))
        cells = assemble(words)
        self.assertEqual(cells[0], "TRIMMED TEXT")
        for cell in cells:
            self.assertEqual(cell, cell.strip())
            self.assertNotIn("  ", cell)

    def test_few_words_do_not_raise(self) -> None:
        cells = assemble([word_at("A", 50, 50), word_at("B", 350, 350)])
        self.assertEqual(len(cells), 16)
        self.assertEqual(cells[0], "A")
        self.assertEqual(sum(1 for c in cells if c), 2)

    def test_repeated_calls_are_independent(self) -> None:
        first = assemble(perfect_grid())
        assemble([word_at("X", 1, 1)])
        self.assertEqual(assemble(perfect_grid()), first)

    def test_input_words_are_not_mutated(self) -> None:
        words = perfect_grid()
        snapshot = list(words)
        assemble(words)
        self.assertEqual(words, snapshot)

    def test_nan_coordinate_is_rejected(self) -> None:
        words = perfect_grid()
        words.append(RecognizedWord("BAD", BBox(float("nan"), 0, 10, 10)))
        with self.assertRaises(InvalidInput):
            assemble(words)

    def test_missing_coordinate_is_rejected(self) -> None:
        with self.assertRaises(InvalidInput):
            assemble([RecognizedWord("BAD", BBox(None, 0, 10, 10))])

    def test_text_coordinate_is_rejected(self) -> None:
        with self.assertRaises(InvalidInput):
            assemble([RecognizedWord("BAD", BBox("10", 0, "20", 10))])

    def test_grid_size_other_than_four_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            assemble([word_at("A", 50, 50)], GridConfig(grid_size=5))
        with self.assertRaises(ValueError):
            assemble([], GridConfig(grid_size=5))

    def test_mean_strategy_given_as_text(self) -> None:
        self.assertEqual(assemble(perfect_grid(), GridConfig(center_update="mean")), WORDS_16)

    def test_infinite_coordinate_is_rejected(self) -> None:
        with self.assertRaises(InvalidInput):
            word_centers([RecognizedWord("BAD", BBox(0, 0, float("inf"), 10))])


class TestHelpers(unittest.TestCase):
    def test_word_centers(self) -> None:
        (center,) = word_centers([RecognizedWord("A", BBox(10, 20, 30, 60))])
        self.assertEqual((center.x, center.y), (20.0, 40.0))
        self.assertEqual((center.x, center.y), (center.word.bbox.xc, center.word.bbox.yc))

    def test_join_cell_orders_by_x(self) -> None:
        far = WordCenter(RecognizedWord("YORK", BBox(0, 0, 1, 1)), x=80, y=0)
        near = WordCenter(RecognizedWord("NEW", BBox(0, 0, 1, 1)), x=45, y=0)
        self.assertEqual(join_cell([far, near]), "NEW YORK")
        self.assertEqual(join_cell([]), "")

    def test_cells_to_rows(self) -> None:
        rows = cells_to_rows(WORDS_16)
        self.assertEqual(rows[1], ["RED", "GREEN", "BLUE", "YELLOW"])
        with self.assertRaises(ValueError):
            cells_to_rows(WORDS_16[:15])


if __name__ == "__main__":
    unittest.main()
