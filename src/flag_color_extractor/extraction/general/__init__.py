"""
general package.
================

Does: Hold project-agnostic helpers (config loading, topic-gated debug logging).
"""

__all__: list[str] = []
__docformat__ = "google"
