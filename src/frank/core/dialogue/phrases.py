"""
Certainty-matched phrase tables.

Each entry pairs a hedged wording (used for LOW certainty input) with a
direct wording (MEDIUM and HIGH).  Tables are priority ordered: the first
entry whose keyword appears in the input wins, otherwise the table's
default is used.

Hedged wordings always carry a tentative word ("might", "could", "sounds
like", ...) so a hesitant user is never answered with a flat statement.
"""

from __future__ import annotations

from dataclasses import dataclass

from frank.core.dialogue.models import CertaintyLevel
from frank.core.rules.matching import contains_any


@dataclass(frozen=True)
class Phrase:
    keywords: tuple[str, ...]
    hedged: str
    direct: str

    def render(self, certainty: CertaintyLevel) -> str:
        return self.hedged if certainty == CertaintyLevel.LOW else self.direct


@dataclass(frozen=True)
class PhraseTable:
    name: str
    entries: tuple[Phrase, ...]
    default: Phrase

    def pick(self, text: str, certainty: CertaintyLevel) -> str:
        for entry in self.entries:
            if contains_any(text, entry.keywords):
                return entry.render(certainty)
        return self.default.render(certainty)

    def all_hedged(self) -> set[str]:
        return {e.hedged for e in self.entries} | {self.default.hedged}

    def all_direct(self) -> set[str]:
        return {e.direct for e in self.entries} | {self.default.direct}


_RELEVANCE = ("doesn't feel relevant", "not relevant", "irrelevant")
_MEANING = ("boring", "pointless")
_DIFFICULTY = ("difficult", "hard")
_OVERLOAD = ("overwhelmed", "too much")

_RELEVANCE_MIRROR = Phrase(
    _RELEVANCE,
    hedged="If something feels like it might not be relevant, that can make it harder to care.",
    direct="If something feels pointless, it's way harder to care.",
)

MIRROR_EMOTION = PhraseTable(
    name="mirror_emotion",
    entries=(
        Phrase(
            ("hate",),
            hedged="It sounds like this might feel really hard.",
            direct="That sounds really hard.",
        ),
        _RELEVANCE_MIRROR,
        Phrase(
            _MEANING,
            hedged="It might be hard to engage with something that doesn't seem meaningful.",
            direct="When something doesn't feel meaningful, it's hard to engage with it.",
        ),
        Phrase(
            _DIFFICULTY,
            hedged="This might feel like a lot right now.",
            direct="This feels like a lot right now.",
        ),
        Phrase(
            _OVERLOAD,
            hedged="This might look like a lot.",
            direct="This looks like a lot.",
        ),
    ),
    default=Phrase((), hedged="It sounds like something might be off.", direct="I hear you."),
)

CLARIFYING_QUESTION = PhraseTable(
    name="clarifying_question",
    entries=(
        Phrase(
            ("hate",),
            hedged="What about it might feel the worst right now?",
            direct="What about it feels the worst right now?",
        ),
        Phrase(
            _RELEVANCE,
            hedged=(
                "Could it be that it doesn't connect to your life, or maybe you don't see "
                "why you're being asked to do it?"
            ),
            direct=(
                "Is the problem more that it doesn't connect to your life, or you don't see "
                "why you're being asked to do it?"
            ),
        ),
        Phrase(
            _MEANING,
            hedged="What might be missing that would make it feel more meaningful?",
            direct="What's missing that would make it feel meaningful?",
        ),
        Phrase(
            _DIFFICULTY,
            hedged="What part might feel the hardest?",
            direct="What part feels the hardest?",
        ),
        Phrase(
            _OVERLOAD,
            hedged="What might feel like too much?",
            direct="What feels like too much?",
        ),
    ),
    default=Phrase(
        (),
        hedged="What might be bothering you about this?",
        direct="What's bothering you about this?",
    ),
)

REFLECT_MEANING = PhraseTable(
    name="reflect_meaning",
    entries=(
        _RELEVANCE_MIRROR,
        Phrase(
            ("doesn't connect", "doesnt connect", "don't connect"),
            hedged=(
                "When something doesn't seem to connect to your life, it could be hard to see "
                "why it matters."
            ),
            direct="When something doesn't connect to your life, it's hard to see why it matters.",
        ),
        Phrase(
            ("because",),
            hedged="It sounds like there might be a real reason behind this.",
            direct="I hear what you're saying.",
        ),
    ),
    default=Phrase((), hedged="That could make sense.", direct="That makes sense."),
)

NARROW_CHOICES = PhraseTable(
    name="narrow_choices",
    entries=(
        Phrase(
            (*_RELEVANCE, "doesn't connect", "doesnt connect", "don't connect"),
            hedged=(
                "Could it be that it doesn't connect to your life, or maybe you don't see "
                "why you're being asked to do it?"
            ),
            direct=(
                "Is the problem more that it doesn't connect to your life, or you don't see "
                "why you're being asked to do it?"
            ),
        ),
        Phrase(
            _MEANING,
            hedged="What might need to change for it to feel more engaging?",
            direct="What would need to change for it to feel more engaging?",
        ),
    ),
    default=Phrase(
        (),
        hedged="Could it be how much there is, or maybe not knowing where to start?",
        direct="Is it more how much there is, or not knowing where to start?",
    ),
)

INTENSITY_REFLECTION = PhraseTable(
    name="intensity_reflection",
    entries=(
        Phrase(
            ("unbearable", "too much", "overwhelming", "intense"),
            hedged=(
                "When something feels unbearable, it might be colliding with something important."
            ),
            direct=(
                "When something feels unbearable, it's often because it's colliding with "
                "something important."
            ),
        ),
        Phrase(
            ("bother",),
            hedged="If it's bothering you this much, it might matter to you.",
            direct="If it's bothering you this much, it probably matters to you.",
        ),
    ),
    default=Phrase(
        (),
        hedged="This might feel really intense right now.",
        direct="This feels really intense right now.",
    ),
)

FUNCTION_CHECK = Phrase(
    (),
    hedged="Could you still think this through, or would it help to slow things down?",
    direct="Are you still able to think, or do you want to slow things down?",
)

ANSWER_MIRROR = PhraseTable(
    name="answer_mirror",
    entries=(
        Phrase(
            ("irrelevant",),
            hedged="If it feels like it might not be relevant, that can make it harder to care.",
            direct="If it feels irrelevant, that makes it hard to care or try.",
        ),
        Phrase(
            _MEANING,
            hedged="It might be hard to engage with something that doesn't seem meaningful.",
            direct="When something doesn't feel meaningful, it's hard to engage with it.",
        ),
        Phrase(
            _DIFFICULTY,
            hedged="This might feel like a lot right now.",
            direct="This feels like a lot right now.",
        ),
        Phrase(
            ("confusing", "confused"),
            hedged="It sounds like it might be confusing.",
            direct="Confusing makes everything harder.",
        ),
        Phrase(
            ("don't get", "dont get", "understand"),
            hedged="Not quite seeing why you need to do something might make it harder to care.",
            direct="Not understanding why you need to do something makes it harder to care.",
        ),
        Phrase(
            ("bad at", "not good at"),
            hedged=(
                "It sounds like you might not feel good at this, and that can make it "
                "harder to start."
            ),
            direct="Feeling like you're not good at something makes it harder to start.",
        ),
    ),
    default=Phrase((), hedged="It sounds like something might be off.", direct="I hear you."),
)

ACKNOWLEDGMENT = PhraseTable(
    name="acknowledgment",
    entries=(
        Phrase(
            ("irrelevant", "pointless", "boring"),
            hedged="We could go a few ways from here.",
            direct="We can go a few ways from here.",
        ),
        Phrase(
            ("hard", "difficult", "stuck", "confusing"),
            hedged="We might be able to work with this.",
            direct="We can work with this.",
        ),
    ),
    default=Phrase((), hedged="", direct=""),
)

CALMING_REASSURANCE = "You can pause whenever you want."
SHRINK_OFFER = "Want to keep going, or make this into one tiny step?"
PAUSED_MESSAGE = "You can come back whenever you're ready."
WELCOME_BACK = "Welcome back. You already made progress."
RESUMED = "Welcome back."
STEP_DONE = "One step done. Want to keep going?"
STEP_TOO_MUCH = "Let's make it easier. We can pause here, or make this step smaller."
ALL_STEPS_DONE = "That's every step. You got through it."

CERTAINTY_TABLES = (
    MIRROR_EMOTION,
    CLARIFYING_QUESTION,
    REFLECT_MEANING,
    NARROW_CHOICES,
    INTENSITY_REFLECTION,
    ANSWER_MIRROR,
)


def hedged_phrases() -> set[str]:
    """Every hedged wording across the certainty-matched tables."""
    out = {FUNCTION_CHECK.hedged}
    for table in CERTAINTY_TABLES:
        out |= table.all_hedged()
    return out


def direct_phrases() -> set[str]:
    out = {FUNCTION_CHECK.direct}
    for table in CERTAINTY_TABLES:
        out |= table.all_direct()
    return out
