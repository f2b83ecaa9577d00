"""Espresso - a static site model builder.

Builds an in-memory route tree from parsed articles and derives the
list pages, index pages, navigation and cross references a renderer needs.
"""

__version__ = "0.4.0"
