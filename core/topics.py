"""
Topic expansion for topic-based search.

Common Islamic topics are mapped to a space-separated list of related
keywords, which then runs through the regular keyword search. Unknown
topics are searched as-is.
"""

__all__ = [
    "QURAN_TOPICS",
    "HADITH_TOPICS",
    "expand_quran_topic",
    "expand_hadith_topic",
]

# ══════════════════════════════════════════════════════════════════════════════
# Topic Tables
# ══════════════════════════════════════════════════════════════════════════════

QURAN_TOPICS: dict[str, str] = {
    "prayer": "prayer salah worship prostrate bow",
    "patience": "patient patience persevere steadfast",
    "charity": "charity alms poor needy spend",
    "faith": "believe faith believer trust",
    "paradise": "paradise garden heaven jannah",
    "hell": "hell fire punishment hellfire",
    "prophet": "prophet messenger muhammad",
    "allah": "allah god lord",
    "mercy": "mercy merciful compassion forgive",
    "justice": "justice just fair equity",
    "knowledge": "knowledge learn wisdom understand",
    "family": "family parents children wife husband",
    "death": "death die hereafter resurrection",
    "creation": "creation create heavens earth",
    "guidance": "guidance guide straight path",
}

HADITH_TOPICS: dict[str, str] = {
    "prayer": "prayer salah worship prostrate",
    "fasting": "fast fasting ramadan",
    "charity": "charity sadaqah alms",
    "hajj": "hajj pilgrimage kaaba",
    "faith": "faith belief iman",
    "prophet": "prophet messenger",
    "companions": "companion sahaba",
    "knowledge": "knowledge learn scholar",
    "manners": "manner behavior conduct",
    "family": "family parents children",
    "marriage": "marriage wife husband",
    "death": "death grave hereafter",
    "jihad": "jihad struggle strive",
    "repentance": "repent forgive sin",
}

# ══════════════════════════════════════════════════════════════════════════════
# Expansion
# ══════════════════════════════════════════════════════════════════════════════


def expand_quran_topic(topic: str) -> str:
    """Return the keyword query for a Quran topic, or the topic itself."""
    return QURAN_TOPICS.get(topic.lower(), topic)


def expand_hadith_topic(topic: str) -> str:
    """Return the keyword query for a Hadith topic, or the topic itself."""
    return HADITH_TOPICS.get(topic.lower(), topic)
