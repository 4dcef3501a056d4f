"""
Step templates per task type, plus persona and how-to-start text.

Templates are plain data.  ``breakdown.generate`` picks one and decides
whether the resilience list gets its breathing step.
"""

from __future__ import annotations

from frank.core.planner.models import HowToStart, Step, TaskType

# ---------------------------------------------------------------------------
# resilience_help
# ---------------------------------------------------------------------------

TAKE_A_BREATH = Step(
    title="Take a Breath",
    description="If you want, you can pause here. You can pause whenever you want.",
)

RESILIENCE_STEPS: tuple[Step, ...] = (
    Step(
        title="Name What's Happening",
        description=(
            "What's going on for you right now? Noticing what you think and feel is the "
            "first step toward working with it."
        ),
        needs_input=True,
        input_prompt="What's on your mind?",
        input_placeholder="Whatever comes to mind...",
    ),
    Step(
        title="What Can You Control?",
        description=(
            "Split it in two: the parts you can change and the parts you can't. Your energy "
            "goes further on the first list."
        ),
        needs_input=True,
        input_prompt="What's in your control, and what isn't?",
        input_placeholder="I can control... I can't control...",
    ),
    Step(
        title="One Small Action",
        description=(
            "Pick one small thing that would actually help. Not what you should do, "
            "just what would work."
        ),
        needs_input=True,
        input_prompt="What's one small action you could take?",
        input_placeholder="Type one small thing you could do...",
    ),
    Step(
        title="Be Kind to Yourself",
        description="What would you tell a friend who was in this spot?",
        needs_input=True,
        input_prompt="What would you say to a friend?",
        input_placeholder="Type what you'd tell a friend...",
    ),
    Step(
        title="Remember It's Temporary",
        description=(
            "This feeling will pass. You've gotten through hard things before, and whatever "
            "helped then tells you something about what works for you."
        ),
    ),
)

# ---------------------------------------------------------------------------
# compare_contrast
# ---------------------------------------------------------------------------

COMPARE_CONTRAST_STEPS: tuple[Step, ...] = (
    Step(
        title="Identify the Themes",
        description=(
            "Themes are the big ideas that keep coming back. Write down two or three that "
            "stuck with you. If you're unsure whether you really get one, that tells you "
            "where to look closer."
        ),
        checklist=(
            "List 2-3 main themes",
            "Write one sentence on why each matters",
            "Pick the theme that interests you most",
            "Check: do I understand this theme, or am I guessing?",
        ),
        analogy="Like picking your favourite song on an album: no need to analyse every track.",
    ),
    Step(
        title="Find Current Connections",
        description=(
            "Where have you seen the same core idea lately? News, social media, school, your "
            "own life all count. It doesn't have to be a perfect match."
        ),
        checklist=(
            "Brainstorm 3-5 situations that relate to your theme",
            "Write one sentence about each connection",
            "Keep the 2-3 strongest",
            "Ask: does this connection feel real, or forced?",
        ),
        analogy="Like hearing a new song and thinking it sounds like another one you know.",
    ),
    Step(
        title="Create Your Comparison Framework",
        description=(
            "Decide how you'll compare: similarities then differences, or theme by theme. "
            "One sentence is enough: I'm comparing this theme to that event."
        ),
        checklist=(
            "Choose a structure",
            "Write: 'I'm comparing [theme] to [current event]'",
            "List 2-3 points of comparison",
            "Ask: does this structure fit what I'm comparing?",
        ),
        analogy="Like planning a road trip: a start, an end and a few stops, not the whole map.",
    ),
    Step(
        title="Gather Your Evidence",
        description=(
            "Find specific moments: a scene or quote on one side, a concrete example on the "
            "other. Two or three solid ones beat a long list."
        ),
        checklist=(
            "Find 2-3 examples from the text",
            "Find 2-3 examples from current events",
            "Write one sentence on why each example matters",
        ),
        analogy="Like building a case: you only need the strongest evidence.",
    ),
    Step(
        title="Write Your First Draft",
        description=(
            "Messy is fine. Start with: 'One important theme is ... and it connects to ... "
            "because ...' and keep going."
        ),
        checklist=(
            "Introduction that states the comparison",
            "A paragraph on the theme",
            "A paragraph on the current connection",
            "A paragraph comparing them",
            "A conclusion that ties it together",
        ),
        analogy="Like making a sandwich: get the ingredients together first, tidy up after.",
    ),
    Step(
        title="Revise and Polish",
        description=(
            "Read it back and ask whether someone else would follow your point. Add "
            "transitions, fix the confusing bits, then think about what worked."
        ),
        checklist=(
            "Read once for clarity",
            "Add transitions between paragraphs",
            "Check each paragraph has a clear point",
            "Fix spelling and grammar",
            "Read it out loud once",
            "Reflect: what would I do differently next time?",
        ),
        analogy="Like editing a photo: the picture is there, you're just cropping and sharpening.",
    ),
)

# ---------------------------------------------------------------------------
# essay
# ---------------------------------------------------------------------------

ESSAY_STEPS: tuple[Step, ...] = (
    Step(
        title="Understand What You're Being Asked",
        description=(
            "Find the actual question in the prompt. If you can't say it in your own words "
            "yet, that's the first thing to clear up."
        ),
        checklist=(
            "Highlight the main question",
            "Circle the key verbs (analyse, explain, argue...)",
            "Write what you need to do in your own words",
            "Check: do I understand this, or am I guessing?",
        ),
    ),
    Step(
        title="Brainstorm Your Ideas",
        description=(
            "No order yet. Dump what you know, what you think, and what you're unsure about. "
            "If nothing comes, you may need to read up first."
        ),
        checklist=(
            "Write down everything you know about the topic",
            "List your open questions",
            "Note any idea that pops up",
        ),
    ),
    Step(
        title="Create an Outline",
        description=(
            "Give the ideas a shape: introduction, main points, conclusion. If the order "
            "feels forced, try another one."
        ),
        checklist=(
            "Write your main argument",
            "List 3-5 main points",
            "Put them in the order that makes sense",
        ),
    ),
    Step(
        title="Write Your First Draft",
        description=(
            "Get it down without polishing. If you stall, go back to the outline or write "
            "a different section first."
        ),
        checklist=(
            "Write the introduction",
            "Write each body paragraph",
            "Write the conclusion",
        ),
    ),
    Step(
        title="Revise and Edit",
        description=(
            "Read it through for sense, flow and correctness. Then note what worked in how "
            "you went about it."
        ),
        checklist=(
            "Read once for content",
            "Check the transitions",
            "Fix grammar and spelling",
            "Reflect: what would I change next time?",
        ),
    ),
)

# ---------------------------------------------------------------------------
# general / reading_response
# ---------------------------------------------------------------------------

GENERAL_STEPS: tuple[Step, ...] = (
    Step(
        title="Break It Into Smaller Pieces",
        description=(
            "List the parts of the task. Seeing what you're actually dealing with makes it "
            "smaller."
        ),
        checklist=(
            "List every part of the task",
            "Order them by what comes first",
            "Mark the easiest parts",
        ),
    ),
    Step(
        title="Start With the Easiest Part",
        description=(
            "Begin with whatever feels most manageable. If you're still stuck after a few "
            "minutes, pick a different starting point."
        ),
        checklist=(
            "Pick the easiest or most interesting part",
            "Set a timer for 15-20 minutes",
            "Work on just that part",
        ),
    ),
    Step(
        title="Tackle the Rest One at a Time",
        description=(
            "One part, then the next. If you notice you're going through the motions "
            "without understanding, slow down or ask for help."
        ),
        checklist=(
            "Move to the next part",
            "Finish it before moving on",
            "Take short breaks between parts",
        ),
    ),
    Step(
        title="Review and Complete",
        description="Check nothing is missing and that it all makes sense.",
        checklist=(
            "Review each part",
            "Double-check the requirements",
            "Reflect: what worked well?",
        ),
    ),
)

# ---------------------------------------------------------------------------
# Persona and how-to-start text
# ---------------------------------------------------------------------------

RESILIENCE_ACKNOWLEDGEMENTS: tuple[str, ...] = (
    "This kind of assignment can feel heavy.",
    "A lot of people get stuck here.",
    "You're not behind.",
    "This looks like a lot.",
)

PERSONA_MESSAGES: dict[TaskType, str] = {
    TaskType.COMPARE_CONTRAST: (
        "A compare/contrast assignment. Think of explaining to a friend why two films are "
        "alike but different: you'd say why, not just that they're both good. Same here, "
        "with ideas instead of films."
    ),
    TaskType.ESSAY: (
        "A paper to write. A blank page can feel huge, but every paper is a handful of "
        "smaller ideas joined together. We'll build it one piece at a time."
    ),
    TaskType.READING_RESPONSE: (
        "A reading assignment. Even dense books are made of smaller pieces. We'll go through "
        "it the way you'd explain a plot to a friend who missed the film."
    ),
    TaskType.GENERAL: (
        "A task ahead of you. When your brain says it's too much, the trick is to only ever "
        "look at one small, easy piece."
    ),
}

HOW_TO_START: dict[TaskType, HowToStart] = {
    TaskType.RESILIENCE_HELP: HowToStart(
        title="Let's Start Here",
        content="You're dealing with something difficult right now.",
    ),
    TaskType.COMPARE_CONTRAST: HowToStart(
        title="How to Get Started",
        content=(
            "Pick one theme that stood out to you, then think of one place you've seen "
            "something like it. That connection is your starting point."
        ),
    ),
    TaskType.ESSAY: HowToStart(
        title="How to Get Started",
        content=(
            "Don't write the whole paper in your head. Write down three things you want to "
            "say, in any order. Seeing them on paper gets the rest moving."
        ),
    ),
}

DEFAULT_HOW_TO_START = HowToStart(
    title="How to Get Started",
    content="What's the smallest, simplest thing you can do right now? Start there.",
)

STEP_TEMPLATES: dict[TaskType, tuple[Step, ...]] = {
    TaskType.RESILIENCE_HELP: RESILIENCE_STEPS,
    TaskType.COMPARE_CONTRAST: COMPARE_CONTRAST_STEPS,
    TaskType.ESSAY: ESSAY_STEPS,
    TaskType.READING_RESPONSE: GENERAL_STEPS,
    TaskType.GENERAL: GENERAL_STEPS,
}
