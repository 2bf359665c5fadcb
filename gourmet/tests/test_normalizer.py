import unittest

from gourmet.logic.shopping.normalizer import normalize, display_sort_key


class TestNormalize(unittest.TestCase):

    def test_plural_n_and_case(self):
        self.assertEqual(normalize("Zwiebeln"), "zwiebel")
        self.assertEqual(normalize("  ZWIEBEL "), "zwiebel")

    def test_trailing_s(self):
        self.assertEqual(normalize("Tomates"), "tomate")

    def test_only_one_letter_stripped(self):
        self.assertEqual(normalize("Kartoffeln"), "kartoffel")
        self.assertEqual(normalize("ss"), "s")

    def test_single_letter_kept(self):
        self.assertEqual(normalize("n"), "n")
        self.assertEqual(normalize(""), "")

    def test_display_sort_umlauts_with_base_letter(self):
        names = ["Zucchini", "Äpfel", "apfelmus", "Birne"]
        self.assertEqual(sorted(names, key=display_sort_key), ["Äpfel", "apfelmus", "Birne", "Zucchini"])

    def test_display_sort_case_insensitive(self):
        self.assertLess(display_sort_key("banane"), display_sort_key("Chili"))
