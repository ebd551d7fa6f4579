"""
flag_color_extractor
====================

Does: Root package initializer for the flag color extraction project.
Returns: Exposes internal subpackages (`extraction`, `cli`) through a stable namespace.
Used by: All higher-level imports starting from `flag_color_extractor.*`.
"""

__all__: list[str] = []
__docformat__ = "google"
__version__ = "0.1.0"
