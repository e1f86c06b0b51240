"""Shared fixtures for the unit tests."""

import pytest

from formbinder.strategies.form_builders import HtmlFormBuilder


@pytest.fixture
def builder():
    """Create a form builder with the default bean inspector."""
    return HtmlFormBuilder()


@pytest.fixture
def answer_labels():
    """Label bundle for the answers of the 'question' field."""
    return {
        "question:a1": "answer1",
        "question:a2": "answer2",
        "question:a3": "answer3",
    }
