"""Tests for the curated topic expansions."""

import pytest

from core.topics import HADITH_TOPICS, QURAN_TOPICS, expand_hadith_topic, expand_quran_topic


def test_topic_tables_have_expected_entries():
    assert len(QURAN_TOPICS) == 15
    assert len(HADITH_TOPICS) == 14
    assert "guidance" in QURAN_TOPICS
    assert "repentance" in HADITH_TOPICS


@pytest.mark.parametrize("topic", ["prayer", "Prayer", "PRAYER"])
def test_quran_topic_lookup_is_case_insensitive(topic):
    assert expand_quran_topic(topic) == QURAN_TOPICS["prayer"]


def test_hadith_topic_expands():
    assert expand_hadith_topic("fasting") == HADITH_TOPICS["fasting"]
    assert "ramadan" in expand_hadith_topic("fasting")


def test_unknown_topic_is_returned_unchanged():
    assert expand_quran_topic("Astronomy") == "Astronomy"
    assert expand_hadith_topic("trade ethics") == "trade ethics"


def test_quran_only_topic_is_not_expanded_for_hadith():
    assert "paradise" in QURAN_TOPICS
    assert "paradise" not in HADITH_TOPICS
    assert expand_hadith_topic("paradise") == "paradise"
