"""
Built-in rule sets.

``DEFAULT_RULES`` is the full vocabulary used when no rules file is
configured (and the base every rules file extends).  ``FALLBACK_RULES`` is
a deliberately small set used when the configured rules cannot be loaded:
classification degrades but keeps working.
"""

from __future__ import annotations

from frank.core.rules.model import (
    AnswerRules,
    CertaintyRules,
    ClassificationRules,
    ContentPolicyRules,
    OverwhelmRules,
    PlannerRules,
    PolicyCategory,
    ReadinessRules,
    RuleConfig,
    TopicGroup,
)

# ---------------------------------------------------------------------------
# Certainty
# ---------------------------------------------------------------------------

_HIGH_CERTAINTY = (
    "i hate",
    "i love",
    "this is",
    "that is",
    "it is",
    "always",
    "never",
    "impossible",
    "can't",
    "cannot",
    "won't",
    "will not",
    "definitely",
    "absolutely",
    "completely",
    "totally",
    "i give up",
    "i'm done",
    "im done",
)

_LOW_CERTAINTY = (
    "i think",
    "maybe",
    "perhaps",
    "might",
    "could be",
    "it feels like",
    "it seems like",
    "i'm not sure",
    "im not sure",
    "i guess",
    "i suppose",
    "sort of",
    "kind of",
    "a little",
    "a bit",
    "somewhat",
    "possibly",
    "i wonder",
    "not really sure",
    "not sure",
    "unsure",
    "uncertain",
)

# ---------------------------------------------------------------------------
# Overwhelm
# ---------------------------------------------------------------------------

_LOSS_OF_FUNCTION = (
    "can't think",
    "cant think",
    "can't process",
    "brain won't work",
    "mind is blank",
    "can't focus",
    "can't function",
    "completely stuck",
    "nothing works",
    "can't do anything",
    "can't do this",
    "cannot do this",
    "paralyzed",
    "frozen",
    "shut down",
    "shutdown",
)

_INTENSITY_ONLY = (
    "unbearable",
    "hate this",
    "hate it",
    "so angry",
    "furious",
    "overwhelming",
    "intense",
    "can't stand",
    "drives me crazy",
)

_GENERIC_OVERWHELM = (
    "i can't",
    "i cannot",
    "too much",
    "too hard",
    "i give up",
    "give up",
    "this is too much",
    "freeze",
    "stuck",
    "trapped",
    "i'm done",
    "im done",
    "can't handle",
    "cannot handle",
)

_EXPLICIT_OVERWHELM = (
    "too much",
    "can't",
    "cannot",
    "overwhelmed",
    "stressed",
    "anxious",
    "panic",
    "shut down",
    "frozen",
    "paralyzed",
    "can't think",
    "can't process",
    "brain won't work",
    "mind is blank",
    "can't focus",
    "can't function",
    "completely stuck",
    "nothing works",
    "can't do anything",
    "i give up",
    "i'm done",
    "im done",
)

_INFORMATIONAL = (
    "irrelevant",
    "pointless",
    "doesn't matter",
    "doesnt matter",
    "don't care",
    "dont care",
    "boring",
    "useless",
    "waste",
    "not important",
    "not relevant",
    "doesn't make sense",
    "doesnt make sense",
    "no point",
    "why do i need",
    "why do we need",
)

# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

_SHRINK = (
    "make it smaller",
    "make this smaller",
    "break it down",
    "break this down",
    "too big",
    "too large",
    "smaller steps",
    "tiny step",
    "one step",
    "simpler",
)

_EXPLANATORY = (
    r"it doesn'?t feel",
    r"it doesn'?t seem",
    r"\bbecause\b",
    r"the problem is",
    r"what'?s wrong is",
    r"doesn'?t connect",
    r"not relevant",
    r"irrelevant",
)

_EMOTIONAL = (
    "hate",
    "love",
    "feel",
    "feeling",
    "frustrated",
    "anxious",
    "stressed",
    "overwhelmed",
    "difficult",
    "hard",
    "sucks",
    "boring",
    "pointless",
    "useless",
    "waste of time",
    "don't care",
    "dont care",
)

_ASSIGNMENT = (
    "assignment",
    "essay",
    "paper",
    "write a",
    "write an",
    "read the",
    "read a",
    "read an",
    "book report",
    "compare",
    "contrast",
    "analyze",
    "research project",
    "homework",
    "due date",
    "how do i",
    "how to",
    "what should i",
    "help me",
    "show me",
    "explain",
    "walk me through",
    "guide",
    "steps",
)

# ---------------------------------------------------------------------------
# Readiness
# ---------------------------------------------------------------------------

_READINESS = (
    "i'm ready",
    "im ready",
    "ready",
    "let's start",
    "lets start",
    "let's go",
    "lets go",
    "show me",
    "help me start",
    "i want to start",
    "can we start",
    "how do i start",
    "what's the first step",
    "whats the first step",
    "first step",
    "begin",
    "start now",
    "i want to do this",
    "let's do this",
    "lets do this",
)

_ACTION_DIRECTIONS = (
    "help me get through",
    "help me start",
    "show me",
    "let's start",
    "lets start",
    "make this smaller",
    "break this down",
    "start this",
    "begin",
    "get started",
    "keep going",
)

_DIRECT_REQUESTS = (
    r"^help me (write|do|complete|finish|start|get through)",
    r"^how do i\b",
    r"^how to\b",
    r"^show me\b",
    r"^break (it|this) down",
    r"^walk me through",
)

_ANSWER_READINESS = (
    "help me",
    "show me",
    "how do",
    "start",
    "first step",
)

# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------

_DECLARATIVE = (
    r"^(it|this|that|i|we|they) (is|feels|seems|doesn'?t|can'?t|cannot)\b",
    r"^(because|since|when|if)\b",
    r"^(i don'?t|i can'?t|i cannot|i'?m)\b",
    r"^(seems|feels|looks|sounds)\b",
)

_EXPLORATORY = (
    r"\?\s*$",
    r"^(what|why|how|when|where|who|which|can|could|should|would|might|maybe|perhaps)\b",
    r"\bi (think|wonder|guess|suppose|feel like|feel as if)\b",
)

_NEW_TOPIC = (
    r"^(help me|i need|can you|show me|how do i|how to)\b",
    r"^(actually|wait|hold on|never mind|forget it|different)\b",
    r"\?\s*$",
    r"^(what|why|how|when|where|who|which|can|could|should|would)\b",
)

_TOPICS = (
    TopicGroup(
        question_words=("worst", "hardest", "bother", "difficult"),
        answer_words=(
            "worst",
            "hardest",
            "difficult",
            "hard",
            "problem",
            "issue",
            "irrelevant",
            "boring",
            "pointless",
            "bad at",
            "don't get",
            "dont get",
            "confusing",
            "confused",
            "because",
            "seems",
            "feels",
        ),
    ),
    TopicGroup(
        question_words=("why", "what makes", "what about"),
        answer_words=("because", "since"),
        answer_prefixes=("it", "this", "that"),
    ),
    TopicGroup(
        question_words=("relevant", "connect", "matter", "point"),
        answer_words=(
            "relevant",
            "irrelevant",
            "matter",
            "point",
            "pointless",
            "boring",
            "purpose",
            "meaning",
            "connect",
            "relate",
            "life",
        ),
    ),
    TopicGroup(
        question_words=("missing", "meaningful", "engaging", "change"),
        answer_words=("boring", "interesting", "fun", "matter", "care", "point", "more", "less"),
    ),
    TopicGroup(
        question_words=("think", "slow"),
        answer_words=("think", "slow", "able", "can", "pause", "stop", "yes", "no"),
    ),
    TopicGroup(
        question_words=("too much",),
        answer_words=("everything", "all", "too", "much", "many", "long", "time"),
    ),
)

_UNCERTAINTY = (
    "i don't know",
    "i dont know",
    "not sure",
    "unsure",
    "uncertain",
    "maybe",
    "perhaps",
    "might",
    "could be",
    "possibly",
    "i think",
    "i guess",
    "i suppose",
    "i wonder",
    "what if",
    "how about",
    "why would",
    "could it",
)

_ANSWER_MARKERS = (
    "because",
    "since",
    "when",
    "it's",
    "its",
    "this is",
    "that is",
    "seems",
    "feels",
    "is",
    "are",
    "doesn't",
    "doesnt",
    "can't",
    "cannot",
    "irrelevant",
    "boring",
    "pointless",
    "hard",
    "difficult",
    "bad at",
    "don't get",
    "dont get",
)

# ---------------------------------------------------------------------------
# Content policy
# ---------------------------------------------------------------------------

_POLICY_CATEGORIES = (
    PolicyCategory(
        name="self_harm",
        keywords=(
            "suicide",
            "suicidal",
            "kill myself",
            "end my life",
            "self harm",
            "self-harm",
            "cut myself",
            "hurt myself",
        ),
    ),
    PolicyCategory(
        name="sexual",
        keywords=("sex", "sexual", "porn", "pornography", "nude", "nudes", "naked", "xxx"),
    ),
    PolicyCategory(
        name="violent",
        keywords=("kill", "murder", "shoot", "stab", "gun", "bomb", "torture"),
    ),
)

# ---------------------------------------------------------------------------
# Planner
# ---------------------------------------------------------------------------

_GENERAL_HELP = (
    "hate",
    "difficult",
    "hard",
    "struggling",
    "stuck",
    "overwhelmed",
    "frustrated",
    "anxious",
    "stress",
    "can't",
    "cannot",
    "don't know",
    "feel",
    "deal with",
    "cope",
    "handle",
    "situation",
    "problem",
    "issue",
    "doesn't",
    "doesnt",
    "relevant",
    "boring",
    "pointless",
    "useless",
    "sucks",
    "not working",
    "waste of time",
)

DEFAULT_RULES = RuleConfig(
    name="default",
    certainty=CertaintyRules(high=_HIGH_CERTAINTY, low=_LOW_CERTAINTY),
    overwhelm=OverwhelmRules(
        loss_of_function=_LOSS_OF_FUNCTION,
        intensity_only=_INTENSITY_ONLY,
        generic=_GENERIC_OVERWHELM,
        explicit=_EXPLICIT_OVERWHELM,
        informational=_INFORMATIONAL,
    ),
    classification=ClassificationRules(
        shrink=_SHRINK,
        explanatory_patterns=_EXPLANATORY,
        emotional=_EMOTIONAL,
        assignment=_ASSIGNMENT,
    ),
    readiness=ReadinessRules(
        signals=_READINESS,
        action_directions=_ACTION_DIRECTIONS,
        direct_request_patterns=_DIRECT_REQUESTS,
        answer_readiness=_ANSWER_READINESS,
    ),
    answers=AnswerRules(
        declarative_patterns=_DECLARATIVE,
        exploratory_patterns=_EXPLORATORY,
        new_topic_patterns=_NEW_TOPIC,
        topics=_TOPICS,
        uncertainty_markers=_UNCERTAINTY,
        answer_markers=_ANSWER_MARKERS,
    ),
    content_policy=ContentPolicyRules(categories=_POLICY_CATEGORIES),
    planner=PlannerRules(
        general_help=_GENERAL_HELP,
        compare_contrast=("compare", "contrast", "correlate", "theme"),
        reading=("reading", "read the", "read a", "book"),
    ),
)

FALLBACK_RULES = RuleConfig(
    name="fallback",
    certainty=CertaintyRules(high=("always", "never", "can't"), low=("maybe", "i think")),
    overwhelm=OverwhelmRules(
        loss_of_function=("can't think", "can't do this", "frozen"),
        generic=("too much", "give up"),
        explicit=("too much", "can't", "overwhelmed"),
    ),
    classification=ClassificationRules(
        shrink=("smaller", "break it down"),
        emotional=("hate", "feel", "hard"),
        assignment=("assignment", "essay", "help me", "how do i"),
    ),
    readiness=ReadinessRules(
        signals=("ready", "let's start", "first step"),
        action_directions=("help me get through", "start this", "keep going"),
        answer_readiness=("help me", "start"),
    ),
    answers=AnswerRules(
        exploratory_patterns=(r"\?\s*$",),
        new_topic_patterns=(r"\?\s*$",),
        answer_markers=("because", "is", "feels"),
        uncertainty_markers=("maybe", "not sure"),
    ),
    content_policy=ContentPolicyRules(categories=_POLICY_CATEGORIES),
)
