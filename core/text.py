"""
Script detection and Arabic normalization.

Arabic text is compared after stripping diacritics and folding letter
variants, so that a query typed without tashkeel still matches fully
vocalized Quran text. Latin text is only lower-cased.
"""

import re

__all__ = [
    "is_arabic_script",
    "normalize_arabic",
    "normalize_for_matching",
]

# ══════════════════════════════════════════════════════════════════════════════
# Patterns
# ══════════════════════════════════════════════════════════════════════════════

ARABIC_SCRIPT = re.compile(
    r"[\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\uFB50-\uFDFF\uFE70-\uFEFF]"
)

DIACRITICS = re.compile(r"[\u064B-\u065F\u0670]")
ALEF_VARIANTS = re.compile(r"[\u0625\u0623\u0622\u0627]")
YEH_VARIANTS = re.compile(r"[\u064A\u0649]")

ALEF = "\u0627"
TEH_MARBUTA = "\u0629"
HEH = "\u0647"
YEH = "\u064A"
TATWEEL = "\u0640"

# ══════════════════════════════════════════════════════════════════════════════
# Functions
# ══════════════════════════════════════════════════════════════════════════════


def is_arabic_script(text: str) -> bool:
    """Return True if any character of ``text`` is in an Arabic block."""
    return bool(text) and ARABIC_SCRIPT.search(text) is not None


def normalize_arabic(text: str) -> str:
    """
    Normalize Arabic text for matching.

    Removes tashkeel, folds Alef, Teh Marbuta and Yeh variants, strips
    tatweel and trims. Non-Arabic input is returned unchanged.

    Example:
        >>> normalize_arabic("الرَّحْمَٰنِ")
        'الرحمن'
    """
    if not is_arabic_script(text):
        return text

    text = DIACRITICS.sub("", text)
    text = ALEF_VARIANTS.sub(ALEF, text)
    text = text.replace(TEH_MARBUTA, HEH)
    text = YEH_VARIANTS.sub(YEH, text)
    text = text.replace(TATWEEL, "")
    return text.strip()


def normalize_for_matching(text: str) -> str:
    """Arabic text is normalized, everything else lower-cased."""
    if is_arabic_script(text):
        return normalize_arabic(text)
    return text.lower()
