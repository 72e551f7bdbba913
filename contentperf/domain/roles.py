from __future__ import annotations

from typing import Mapping

from contentperf.domain.states import DEFAULT_ROLE

WILDCARD_SUFFIX = "/*"

# Used when the role map store is missing. Wildcards are matched in order,
# so more specific patterns go first.
DEFAULT_ROLE_MAP: dict[str, str] = {
    "/what-is-otherwhere": "trust",
    "/otherwhere-vs-chatgpt": "acquisition",
    "/what-is-ai-travel-concierge": "comprehension",
    "/case-studies/*": "trust",
    "/destinations/*": "acquisition",
}


def resolve_role(page_path: str, role_map: Mapping[str, str]) -> str:
    """Exact match, then first wildcard prefix match in map order, then the default role."""
    role = role_map.get(page_path)
    if role:
        return role

    for pattern, role in role_map.items():
        if not pattern.endswith(WILDCARD_SUFFIX):
            continue
        prefix = pattern[:-1]
        if page_path.startswith(prefix):
            return role

    return DEFAULT_ROLE
