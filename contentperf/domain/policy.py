from __future__ import annotations

from contentperf.domain.states import ActionId, Bucket, ContentRole


BUCKET_ACTIONS: dict[Bucket, tuple[ActionId, ...]] = {
    Bucket.A: (
        ActionId.EXPAND_TOPIC_CLUSTER,
        ActionId.ADD_INTERNAL_LINKS_TO,
        ActionId.ADD_FAQ_BLOCK,
    ),
    Bucket.B: (ActionId.REWRITE_META, ActionId.ADD_QUICK_ANSWER),
    Bucket.C: (ActionId.SWAP_CTA_VARIANT, ActionId.ADD_MID_ARTICLE_CTA),
    Bucket.D: (
        ActionId.ADD_NEXT_STEPS_SECTION,
        ActionId.STRENGTHEN_INTERNAL_LINKS,
        ActionId.ADD_RELATED_CONTENT,
    ),
    Bucket.F: (ActionId.CONSIDER_NOINDEX, ActionId.REWRITE_WITH_NEW_ANGLE),
}


def actions_for(bucket: Bucket | None, role: str) -> list[ActionId]:
    # Trust pages never get automated work, whatever the bucket.
    if role == ContentRole.TRUST:
        return [ActionId.FLAG_FOR_REVIEW]

    if bucket is None:
        return []

    if bucket == Bucket.C and role == ContentRole.COMPREHENSION:
        return []

    if bucket == Bucket.F and role == ContentRole.COMPREHENSION:
        return [ActionId.FLAG_FOR_REVIEW]

    return list(BUCKET_ACTIONS[bucket])
