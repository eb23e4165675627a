"""
Model classification for endpoint routing.

Search-preview models cannot combine function calling with web search on the
Responses API, so they are served through chat/completions instead.

Classification is a plain substring test. Every entry in SEARCH_PREVIEW_MODELS
carries the SEARCH_PREVIEW_TOKEN, and the token test also catches dated
snapshots that are not listed yet.
"""

SEARCH_PREVIEW_TOKEN = "search-preview"

SEARCH_PREVIEW_MODELS: tuple[str, ...] = (
    "gpt-4o-search-preview",
    "gpt-4o-mini-search-preview",
    "gpt-4o-search-preview-2025-03-11",
    "gpt-4o-mini-search-preview-2025-03-11",
)


def is_search_preview_model(model: str) -> bool:
    """
    Return True if the model must be routed through chat/completions.

    Examples:
        >>> is_search_preview_model("gpt-4o-search-preview")
        True
        >>> is_search_preview_model("gpt-4o-search-preview-2026-01-01")
        True
        >>> is_search_preview_model("gpt-4o")
        False
    """
    return SEARCH_PREVIEW_TOKEN in model
