"""Keyword-scored chatbot over a static knowledge base."""

import random
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

EMPTY_MESSAGE_REPLY = "I'm listening! Please tell me what's on your mind."

FALLBACK_REPLY = (
    "I'm not sure I understood that. You can ask me about study abroad programs, "
    "education loans, visas, test preparation or how to contact our counselors."
)

# Ties below this score ask the visitor to choose between the tied topics
CLARIFY_BELOW = 5

PHRASE_WEIGHT = 3
KEYWORD_WEIGHT = 1


@dataclass(frozen=True)
class KnowledgeEntry:
    """One intent the chatbot can answer."""

    label: str
    patterns: Sequence[str]
    response: Union[str, Sequence[str]]
    suggestions: Sequence[str] = field(default_factory=tuple)


@dataclass
class ChatReply:
    """Chatbot answer in its wire shape."""

    reply: str
    match_found: bool
    score: int
    suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reply": self.reply,
            "matchFound": self.match_found,
            "score": self.score,
            "suggestions": list(self.suggestions),
        }


KNOWLEDGE_BASE: List[KnowledgeEntry] = [
    KnowledgeEntry(
        label="JV Overseas",
        patterns=["about jv overseas", "who are you", "jv overseas", "your company"],
        response=[
            "JV Overseas is a study abroad and education loan consultancy based in "
            "Chilakaluripet, Andhra Pradesh. We guide students from course selection to visa.",
            "We're JV Overseas, helping students study abroad with university admissions, "
            "education loans and visa guidance.",
        ],
        suggestions=["Study abroad options", "Education loan", "Contact details"],
    ),
    KnowledgeEntry(
        label="education loans",
        patterns=["education loan", "loan eligibility", "loan", "finance", "funding"],
        response=[
            "We help you secure education loans between ₹30 Lakhs and ₹50 Lakhs through "
            "partner banks and NBFCs. Try our eligibility check to get an estimate.",
            "Education loans can be secured (with collateral) or unsecured (based on "
            "co-applicant income). Our eligibility check gives you a quick estimate.",
        ],
        suggestions=["Check my eligibility", "Secured vs unsecured loan", "Which banks?"],
    ),
    KnowledgeEntry(
        label="partner banks",
        patterns=["which banks", "bank", "lenders", "nbfc"],
        response=(
            "We work with Punjab National Bank, Avanse, Credila, Auxilo, InCred, Tata Capital, "
            "Prodigy Finance, Axis Bank and ICICI Bank."
        ),
        suggestions=["Education loan", "Check my eligibility"],
    ),
    KnowledgeEntry(
        label="study abroad",
        patterns=["study abroad", "universities", "university", "admission", "country"],
        response=[
            "We assist with admissions to universities in the USA, UK, Canada, Australia, "
            "Germany and more. Share your preferred country and course to get started.",
            "Our counselors shortlist universities that match your profile and budget, "
            "then help with applications end to end.",
        ],
        suggestions=["Which countries?", "Education loan", "Talk to a counselor"],
    ),
    KnowledgeEntry(
        label="visa guidance",
        patterns=["student visa", "visa", "visa interview", "documents"],
        response=(
            "We provide complete student visa guidance: document checklists, financial "
            "proof, mock interviews and application filing."
        ),
        suggestions=["Study abroad options", "Talk to a counselor"],
    ),
    KnowledgeEntry(
        label="test preparation",
        patterns=["ielts", "toefl", "gre", "gmat", "pte", "test preparation"],
        response=(
            "We can guide you on IELTS, TOEFL, PTE, GRE and GMAT requirements for your "
            "target universities and help you plan your preparation."
        ),
        suggestions=["Study abroad options", "Talk to a counselor"],
    ),
    KnowledgeEntry(
        label="contact details",
        patterns=["contact", "phone number", "call", "address", "office", "talk to a counselor"],
        response=(
            "You can reach us at +91 8712275590 or jvoverseaspvtltd@gmail.com. "
            "Our office is at Medara Bazar, Chilakaluripet, AP."
        ),
        suggestions=["Education loan", "Study abroad options"],
    ),
    KnowledgeEntry(
        label="greetings",
        patterns=["hello", "hi", "hey", "good morning", "good evening"],
        response=[
            "Hello! How can I help you with your study abroad plans today?",
            "Hi there! Ask me about universities, education loans or visas.",
        ],
        suggestions=["Study abroad options", "Education loan", "Contact details"],
    ),
]


class ChatResponder:
    """Score a message against the knowledge base and pick a reply."""

    def __init__(
        self,
        knowledge_base: Optional[Sequence[KnowledgeEntry]] = None,
        fallback: str = FALLBACK_REPLY,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize chat responder.

        Args:
            knowledge_base: Entries to match against (defaults to the built-in set)
            fallback: Reply when nothing matches
            rng: Random source for picking among response variants
        """
        self._entries = list(KNOWLEDGE_BASE if knowledge_base is None else knowledge_base)
        self._fallback = fallback
        self._rng = rng or random.Random()

    @staticmethod
    def score(message: str, entry: KnowledgeEntry) -> int:
        """
        Score one entry against a message.

        Args:
            message: Visitor message
            entry: Knowledge base entry

        Returns:
            +3 per whole pattern found, +1 per pattern word found on word boundaries
        """
        lower = message.lower()
        total = 0
        for pattern in entry.patterns:
            pattern_lower = pattern.lower()
            if pattern_lower in lower:
                total += PHRASE_WEIGHT
            for word in pattern_lower.split():
                if re.search(rf"\b{re.escape(word)}\b", lower):
                    total += KEYWORD_WEIGHT
        return total

    def respond(self, message: str) -> ChatReply:
        """
        Answer a visitor message.

        Args:
            message: Non-empty visitor message

        Returns:
            ChatReply with the best match, a clarification, or the fallback
        """
        best: Optional[KnowledgeEntry] = None
        best_score = 0
        tied: List[KnowledgeEntry] = []

        for entry in self._entries:
            current = self.score(message, entry)
            if current > best_score:
                best, best_score, tied = entry, current, [entry]
            elif current > 0 and current == best_score:
                tied.append(entry)

        if best is None:
            return ChatReply(reply=self._fallback, match_found=False, score=0)

        if len(tied) > 1 and best_score < CLARIFY_BELOW:
            options = " or ".join(entry.label for entry in tied)
            return ChatReply(
                reply=f"I'm not quite sure—are you asking about {options}?",
                match_found=False,
                score=best_score,
                suggestions=[f"Tell me about {entry.label}" for entry in tied],
            )

        if isinstance(best.response, str):
            reply = best.response
        else:
            reply = self._rng.choice(list(best.response))
        return ChatReply(
            reply=reply, match_found=True, score=best_score, suggestions=list(best.suggestions)
        )
