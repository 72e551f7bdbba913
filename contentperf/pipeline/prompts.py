from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from contentperf.domain.models import PerformanceRecord
from contentperf.domain.states import ACTION_TIERS, ActionId, Tier, TierTableError

META_DESCRIPTION_MAX_CHARS = 155
MAIN_CTA = "text TRAVEL to +1 323-922-4067"


@dataclass(frozen=True)
class PromptSpec:
    build: Callable[[PerformanceRecord], str]
    max_tokens: int
    max_chars: int | None = None
    label: str = "content"


def _meta_rewrite(record: PerformanceRecord) -> str:
    m = record.metrics
    return (
        "You are optimizing a meta description for better CTR.\n\n"
        f"Current page: {record.slug}\n"
        "Current meta: None\n"
        f"Page metrics: {m.pageviews} views, {m.avg_engagement}s avg engagement\n\n"
        f"Write a compelling meta description (max {META_DESCRIPTION_MAX_CHARS} chars) that:\n"
        "1. Includes the primary keyword naturally\n"
        "2. Creates curiosity or promises value\n"
        "3. Ends with implicit call to action\n\n"
        "Return ONLY the new meta description, no quotes or explanation."
    )


def _quick_answer(record: PerformanceRecord) -> str:
    return (
        f'Based on this page slug "{record.slug}", write a Quick Answer block.\n\n'
        "This should be a 2-3 sentence direct answer to the search intent, "
        "placed at the top of the article.\n\n"
        "Format:\n**Quick answer:** [Your answer here]\n\n"
        "Keep it factual, direct, no fluff. Return ONLY the quick answer block."
    )


def _next_steps(record: PerformanceRecord) -> str:
    return (
        f'For a travel blog page about "{record.slug}", write a "What to do next" section.\n\n'
        "Include 2-3 options:\n"
        "1. A related article to read\n"
        f"2. The main CTA ({MAIN_CTA})\n"
        "3. Optional: another resource\n\n"
        "Format as markdown. Keep it concise and helpful, not salesy."
    )


def _internal_links_to(record: PerformanceRecord) -> str:
    return (
        f'The page "{record.slug}" converts well and should receive more internal links.\n\n'
        "Suggest 3-5 sentences that other articles on a travel site could include to link "
        "to it. For each, give the anchor text in square brackets followed by the sentence.\n\n"
        "Use descriptive anchor text, never \"click here\". Return ONLY the list as markdown bullets."
    )


def _related_content(record: PerformanceRecord) -> str:
    return (
        f'Readers land on "{record.slug}" and leave without visiting another page.\n\n'
        'Write a short "Related reading" block with 3 suggested topics a reader of this page '
        "would want next, each with a one-line reason.\n\n"
        "Format as markdown bullets. Return ONLY the block."
    )


PROMPTS: dict[ActionId, PromptSpec] = {
    ActionId.REWRITE_META: PromptSpec(
        _meta_rewrite, max_tokens=200, max_chars=META_DESCRIPTION_MAX_CHARS, label="new meta"
    ),
    ActionId.ADD_QUICK_ANSWER: PromptSpec(_quick_answer, max_tokens=200, label="quick answer"),
    ActionId.ADD_NEXT_STEPS_SECTION: PromptSpec(_next_steps, max_tokens=300, label="next steps section"),
    ActionId.ADD_INTERNAL_LINKS_TO: PromptSpec(_internal_links_to, max_tokens=300, label="internal link suggestions"),
    ActionId.ADD_RELATED_CONTENT: PromptSpec(_related_content, max_tokens=300, label="related content block"),
}


def clip_text(text: str, max_chars: int | None) -> str:
    text = text.strip()
    if max_chars is None:
        return text
    # Capped outputs are single-line copy; models often wrap them in quotes.
    text = text.strip('"').strip()
    if len(text) <= max_chars:
        return text
    clipped = text[:max_chars]
    # Prefer ending on a word boundary.
    cut = clipped.rfind(" ")
    if cut > max_chars // 2:
        clipped = clipped[:cut]
    return clipped.rstrip(" ,;:-")


def check_prompt_table() -> None:
    missing = [a.value for a, tier in ACTION_TIERS.items() if tier == Tier.AUTO and a not in PROMPTS]
    if missing:
        raise TierTableError(f"Auto actions without a prompt: {', '.join(missing)}")


check_prompt_table()
