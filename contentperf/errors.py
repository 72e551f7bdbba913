from __future__ import annotations


class ContentPerfError(RuntimeError):
    pass


class ProviderError(ContentPerfError):
    """Metrics provider is unconfigured or its request failed."""


class GenerationError(ContentPerfError):
    """Generative-text call could not produce usable text."""


class PersistenceError(ContentPerfError):
    pass


class SnapshotNotFoundError(PersistenceError):
    """Required input artifact is missing or does not match its contract."""
