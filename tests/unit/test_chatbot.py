"""Tests for the keyword-scored chatbot."""

import random

import pytest

from leadflow.services.chatbot import (
    FALLBACK_REPLY,
    KNOWLEDGE_BASE,
    ChatResponder,
    KnowledgeEntry,
)

TEA = KnowledgeEntry(label="tea", patterns=["tea"], response="We serve tea.")
CHAI = KnowledgeEntry(label="chai", patterns=["tea"], response="We serve chai.")
GREEN_TEA = KnowledgeEntry(label="green tea", patterns=["green tea"], response="Green it is.")
MATCHA = KnowledgeEntry(label="matcha", patterns=["green tea"], response="Matcha it is.")


def _entry(label: str) -> KnowledgeEntry:
    return next(entry for entry in KNOWLEDGE_BASE if entry.label == label)


class TestScore:
    def test_phrase_and_words(self):
        entry = KnowledgeEntry(label="x", patterns=["education loan"], response="")
        # whole phrase +3, each word +1
        assert ChatResponder.score("I need an Education Loan!", entry) == 5

    def test_words_only(self):
        entry = KnowledgeEntry(label="x", patterns=["education loan"], response="")
        assert ChatResponder.score("a loan for my education", entry) == 2

    def test_word_boundaries(self):
        entry = KnowledgeEntry(label="x", patterns=["visa"], response="")
        # substring counts for the phrase, not for the keyword
        assert ChatResponder.score("visas", entry) == 3
        assert ChatResponder.score("my visa", entry) == 4

    def test_no_match(self):
        assert ChatResponder.score("weather today", TEA) == 0


class TestRespond:
    def test_fallback_when_nothing_matches(self):
        responder = ChatResponder([TEA])

        reply = responder.respond("coffee please")

        assert reply.reply == FALLBACK_REPLY
        assert reply.match_found is False
        assert reply.score == 0
        assert reply.suggestions == []

    def test_low_scoring_tie_asks_for_clarification(self):
        responder = ChatResponder([TEA, CHAI])

        reply = responder.respond("tea")

        assert reply.reply == "I'm not quite sure—are you asking about tea or chai?"
        assert reply.match_found is False
        assert reply.score == 4
        assert reply.suggestions == ["Tell me about tea", "Tell me about chai"]

    def test_confident_tie_keeps_first_entry(self):
        responder = ChatResponder([GREEN_TEA, MATCHA])

        reply = responder.respond("green tea")

        assert reply.reply == "Green it is."
        assert reply.match_found is True
        assert reply.score == 5

    def test_highest_score_wins(self):
        responder = ChatResponder([TEA, GREEN_TEA])

        reply = responder.respond("some green tea")

        assert reply.reply == "Green it is."

    def test_variant_picked_with_rng(self):
        entry = KnowledgeEntry(label="hello", patterns=["hello"], response=["Hi!", "Hey!", "Yo!"])
        expected = random.Random(7).choice(["Hi!", "Hey!", "Yo!"])

        reply = ChatResponder([entry], rng=random.Random(7)).respond("hello")

        assert reply.reply == expected

    def test_custom_fallback(self):
        reply = ChatResponder([TEA], fallback="Ask a human.").respond("??")
        assert reply.reply == "Ask a human."

    def test_to_dict_wire_shape(self):
        data = ChatResponder([TEA]).respond("tea").to_dict()

        assert data == {"reply": "We serve tea.", "matchFound": True, "score": 4, "suggestions": []}


class TestDefaultKnowledgeBase:
    @pytest.fixture
    def responder(self) -> ChatResponder:
        return ChatResponder(rng=random.Random(1))

    def test_education_loan_question(self, responder):
        reply = responder.respond("I need an education loan")

        loans = _entry("education loans")
        assert reply.match_found is True
        assert reply.reply in loans.response
        assert reply.suggestions == list(loans.suggestions)

    def test_contact_question(self, responder):
        reply = responder.respond("How can I contact your office?")

        assert reply.reply == _entry("contact details").response
        assert "+91 8712275590" in reply.reply

    def test_unknown_topic_falls_back(self, responder):
        reply = responder.respond("xyz qwerty")
        assert reply.reply == FALLBACK_REPLY

    def test_every_entry_has_patterns_and_response(self):
        for entry in KNOWLEDGE_BASE:
            assert entry.patterns
            assert entry.response
