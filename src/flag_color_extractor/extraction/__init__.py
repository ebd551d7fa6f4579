# flag_color_extractor/extraction/__init__.py

"""
extraction.
===========

Does: Group the color, svg and general subpackages plus the batch orchestrator.
Used by: The `flag-colors` CLI, tests, and downstream data scripts.
"""

__all__: list[str] = []
__docformat__ = "google"
