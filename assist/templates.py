"""Canned responses served when no provider credential is configured.

There are exactly three templates. Each one is a pure function of the
prompt and of whether the note already has content; which template is used
is decided by a selector so tests can pin the choice.
"""

from __future__ import annotations

import random
from typing import Callable

Template = Callable[[str, bool], str]
Selector = Callable[[int], int]


# ---------------------------------------------------------------------------
# Phrasing slots
# ---------------------------------------------------------------------------


def _mentions(prompt: str, word: str) -> bool:
    return word in prompt.lower()


def brainstorm_slot(prompt: str) -> str:
    if _mentions(prompt, "brainstorm"):
        return "Consider breaking down the problem into smaller components"
    return "Expand on the main themes you've outlined"


def improve_slot(prompt: str) -> str:
    if _mentions(prompt, "improve"):
        return "Add more specific examples to illustrate your points"
    return "Explore alternative perspectives"


def expand_slot(prompt: str) -> str:
    if _mentions(prompt, "expand"):
        return "Include relevant statistics or data to support your arguments"
    return "Consider the implications of your ideas"


def context_lead_in(has_context: bool) -> str:
    return "Building on what you've written, " if has_context else ""


def question_slot(prompt: str) -> str:
    # Case-sensitive by nature: only a literal "?" counts.
    return "To answer your question" if "?" in prompt else "Following your thought"


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


def ideas_template(prompt: str, has_context: bool) -> str:
    return (
        "Based on your request, here are some ideas:\n\n"
        f"• {brainstorm_slot(prompt)}\n"
        f"• {improve_slot(prompt)}\n"
        f"• {expand_slot(prompt)}"
    )


def analysis_template(prompt: str, has_context: bool) -> str:
    return (
        "Here's my analysis:\n\n"
        f"{context_lead_in(has_context)}I suggest:\n\n"
        "1. Define clear objectives\n"
        "2. Research supporting evidence\n"
        "3. Develop actionable next steps\n"
        "4. Consider potential challenges"
    )


def additions_template(prompt: str, has_context: bool) -> str:
    return (
        "Great thinking! Here are some additions:\n\n"
        f"✓ {question_slot(prompt)}, consider these angles\n"
        "✓ This could lead to interesting developments in [related area]\n"
        "✓ Don't forget to factor in [relevant consideration]"
    )


TEMPLATES: tuple[Template, ...] = (
    ideas_template,
    analysis_template,
    additions_template,
)


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


def random_selector(seed: int | None = None) -> Selector:
    """Return a uniform index picker; a seed makes the sequence repeatable."""
    return random.Random(seed).randrange


def render_fallback(
    prompt: str,
    context: str | None = None,
    selector: Selector | None = None,
) -> str:
    """Pick one template and fill it in for *prompt*."""
    pick = selector or random.randrange
    index = pick(len(TEMPLATES))
    if not 0 <= index < len(TEMPLATES):
        raise IndexError(f"Selector returned {index} for {len(TEMPLATES)} templates")
    return TEMPLATES[index](prompt, bool(context))
