from __future__ import annotations

from enum import Enum


class Bucket(str, Enum):
    A = "A"  # winner
    B = "B"  # high intent, low click-through
    C = "C"  # engaged, unconverted
    D = "D"  # entry then exit
    F = "F"  # dead weight


class ContentRole(str, Enum):
    TRUST = "trust"
    ACQUISITION = "acquisition"
    COMPREHENSION = "comprehension"


DEFAULT_ROLE = ContentRole.ACQUISITION.value


class Tier(str, Enum):
    AUTO = "auto"
    DRAFT = "draft"
    REVIEW = "review"


class ActionId(str, Enum):
    REWRITE_META = "rewrite_meta"
    ADD_QUICK_ANSWER = "add_quick_answer"
    ADD_INTERNAL_LINKS_TO = "add_internal_links_to"
    ADD_NEXT_STEPS_SECTION = "add_next_steps_section"
    ADD_RELATED_CONTENT = "add_related_content"
    EXPAND_TOPIC_CLUSTER = "expand_topic_cluster"
    ADD_FAQ_BLOCK = "add_faq_block"
    SWAP_CTA_VARIANT = "swap_cta_variant"
    ADD_MID_ARTICLE_CTA = "add_mid_article_cta"
    REWRITE_WITH_NEW_ANGLE = "rewrite_with_new_angle"
    FLAG_FOR_REVIEW = "flag_for_review"
    CONSIDER_NOINDEX = "consider_noindex"
    STRENGTHEN_INTERNAL_LINKS = "strengthen_internal_links"


class ActionStatus(str, Enum):
    GENERATED = "generated"
    DRAFT = "draft"
    FLAGGED = "flagged"
    SKIPPED = "skipped"
    ERROR = "error"


ACTION_TIERS: dict[ActionId, Tier] = {
    ActionId.REWRITE_META: Tier.AUTO,
    ActionId.ADD_QUICK_ANSWER: Tier.AUTO,
    ActionId.ADD_INTERNAL_LINKS_TO: Tier.AUTO,
    ActionId.ADD_NEXT_STEPS_SECTION: Tier.AUTO,
    ActionId.ADD_RELATED_CONTENT: Tier.AUTO,
    ActionId.EXPAND_TOPIC_CLUSTER: Tier.DRAFT,
    ActionId.ADD_FAQ_BLOCK: Tier.DRAFT,
    ActionId.SWAP_CTA_VARIANT: Tier.DRAFT,
    ActionId.ADD_MID_ARTICLE_CTA: Tier.DRAFT,
    ActionId.REWRITE_WITH_NEW_ANGLE: Tier.DRAFT,
    ActionId.FLAG_FOR_REVIEW: Tier.REVIEW,
    ActionId.CONSIDER_NOINDEX: Tier.REVIEW,
    ActionId.STRENGTHEN_INTERNAL_LINKS: Tier.REVIEW,
}


class TierTableError(ValueError):
    pass


def check_tier_table(table: dict[ActionId, Tier] | None = None) -> None:
    table = ACTION_TIERS if table is None else table
    missing = [a.value for a in ActionId if a not in table]
    if missing:
        raise TierTableError(f"Actions without a tier: {', '.join(missing)}")
    unknown = [str(k) for k, v in table.items() if not isinstance(k, ActionId) or not isinstance(v, Tier)]
    if unknown:
        raise TierTableError(f"Invalid tier table entries: {', '.join(unknown)}")


def tier_for(action: ActionId) -> Tier:
    return ACTION_TIERS[action]


def parse_action(value: str) -> ActionId | None:
    try:
        return ActionId(value)
    except ValueError:
        return None


check_tier_table()
