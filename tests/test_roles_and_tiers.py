from __future__ import annotations

import pytest

from contentperf.domain.roles import DEFAULT_ROLE_MAP, resolve_role
from contentperf.domain.states import (
    ACTION_TIERS,
    ActionId,
    Tier,
    TierTableError,
    check_tier_table,
    parse_action,
)
from contentperf.pipeline.prompts import PROMPTS


def test_exact_match_beats_wildcard() -> None:
    role_map = {"/guides/*": "acquisition", "/guides/visa": "trust"}
    assert resolve_role("/guides/visa", role_map) == "trust"


def test_first_wildcard_in_map_order_wins() -> None:
    role_map = {"/guides/europe/*": "comprehension", "/guides/*": "acquisition"}
    assert resolve_role("/guides/europe/rome", role_map) == "comprehension"
    assert resolve_role("/guides/asia/tokyo", role_map) == "acquisition"

    reversed_map = {"/guides/*": "acquisition", "/guides/europe/*": "comprehension"}
    assert resolve_role("/guides/europe/rome", reversed_map) == "acquisition"


def test_wildcard_prefix_keeps_trailing_slash() -> None:
    assert resolve_role("/case-studies-archive", DEFAULT_ROLE_MAP) == "acquisition"
    assert resolve_role("/case-studies/honeymoon-puglia", DEFAULT_ROLE_MAP) == "trust"


def test_default_role() -> None:
    assert resolve_role("/unknown", {}) == "acquisition"
    assert resolve_role("/what-is-ai-travel-concierge", DEFAULT_ROLE_MAP) == "comprehension"


def test_custom_role_values_pass_through() -> None:
    assert resolve_role("/newsletter", {"/newsletter": "retention"}) == "retention"


def test_tier_table_covers_every_action() -> None:
    check_tier_table()
    assert set(ACTION_TIERS) == set(ActionId)
    assert sum(1 for t in ACTION_TIERS.values() if t == Tier.AUTO) == 5
    assert sum(1 for t in ACTION_TIERS.values() if t == Tier.DRAFT) == 5
    assert sum(1 for t in ACTION_TIERS.values() if t == Tier.REVIEW) == 3


def test_incomplete_tier_table_is_rejected() -> None:
    table = dict(ACTION_TIERS)
    del table[ActionId.ADD_FAQ_BLOCK]
    with pytest.raises(TierTableError, match="add_faq_block"):
        check_tier_table(table)


def test_every_auto_action_has_a_prompt() -> None:
    auto = {a for a, t in ACTION_TIERS.items() if t == Tier.AUTO}
    assert auto == set(PROMPTS)


def test_parse_action() -> None:
    assert parse_action("rewrite_meta") is ActionId.REWRITE_META
    assert parse_action("delete_page") is None
