"""
Upstream client construction for configured providers.
"""

from model_router.providers.factory import clear_cache, get_client

__all__ = ["clear_cache", "get_client"]
