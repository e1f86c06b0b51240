"""Bean inspection strategies."""

from formbinder.strategies.beans.model_inspector import ModelInspector

__all__ = [
    "ModelInspector",
]
