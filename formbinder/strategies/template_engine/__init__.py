"""Template engine strategies.

Implements the comment-tag template store that form fields are rendered into.
"""

from formbinder.strategies.template_engine.markup import MarkupTemplate

__all__ = [
    "MarkupTemplate",
]
