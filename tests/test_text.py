import unittest

from core.text import is_arabic_script, normalize_arabic, normalize_for_matching


class ArabicDetectionTests(unittest.TestCase):
    def test_latin_text_is_not_arabic(self):
        self.assertFalse(is_arabic_script("patience"))
        self.assertFalse(is_arabic_script(""))

    def test_arabic_text_is_detected(self):
        self.assertTrue(is_arabic_script("الصبر"))

    def test_single_arabic_character_in_mixed_text(self):
        self.assertTrue(is_arabic_script("search for ص please"))


class NormalizeArabicTests(unittest.TestCase):
    def test_non_arabic_is_unchanged(self):
        self.assertEqual(normalize_arabic("Hello World "), "Hello World ")

    def test_removes_diacritics(self):
        voweled = "الرَّحْمَٰنِ"
        self.assertEqual(normalize_arabic(voweled), "الرحمن")

    def test_folds_alef_variants(self):
        self.assertEqual(normalize_arabic("أحمد"), "احمد")
        self.assertEqual(normalize_arabic("إسلام"), "اسلام")
        self.assertEqual(normalize_arabic("آمن"), "امن")

    def test_folds_teh_marbuta_to_heh(self):
        self.assertEqual(normalize_arabic("صلاة"), "صلاه")

    def test_folds_alef_maksura_to_yeh(self):
        self.assertEqual(normalize_arabic("هدى"), "هدي")

    def test_strips_tatweel_and_whitespace(self):
        self.assertEqual(normalize_arabic("  الـلـه "), "الله")

    def test_is_idempotent(self):
        once = normalize_arabic("الصَّلَاةُ وَالزَّكَاةُ")
        self.assertEqual(normalize_arabic(once), once)


class NormalizeForMatchingTests(unittest.TestCase):
    def test_latin_is_lower_cased(self):
        self.assertEqual(normalize_for_matching("Patience"), "patience")

    def test_arabic_is_normalized(self):
        self.assertEqual(normalize_for_matching("صلاة"), "صلاه")


if __name__ == "__main__":
    unittest.main()
