"""Shared fixtures for formtree tests."""

import copy

import pytest

from formtree.config import get_config, update_config


@pytest.fixture
def nested_schema():
    """Valid schema: branching nests two levels deep."""
    return {
        "title": "Clinic intake",
        "fields": [
            {"type": "text", "label": "Full name", "name": "full_name", "required": True},
            {
                "type": "radio",
                "label": "Are you in pain?",
                "name": "pain",
                "options": ["Yes", "No"],
                "required": True,
                "conditions": {
                    "Yes": [
                        {
                            "type": "select",
                            "label": "Where?",
                            "name": "location",
                            "options": ["Head", "Back"],
                            "required": True,
                            "conditions": {
                                "Head": [
                                    {"type": "number", "label": "Severity", "name": "severity", "required": True},
                                ],
                                "Back": [
                                    {"type": "text", "label": "Since when?", "name": "since"},
                                ],
                            },
                        },
                    ],
                    "No": [
                        {"type": "text", "label": "Reason for visit", "name": "reason"},
                    ],
                },
            },
            {
                "type": "checkbox",
                "label": "Symptoms",
                "name": "symptoms",
                "options": ["Fever", "Cough"],
                "conditions": {
                    "Fever": [{"type": "number", "label": "Temperature", "name": "temperature"}],
                    "Cough": [{"type": "text", "label": "Cough type", "name": "cough_type"}],
                },
            },
            {"type": "text", "label": "Notes", "name": "notes"},
        ],
    }


@pytest.fixture
def one_level_schema():
    """Branches exist but none nest."""
    return {
        "title": "T",
        "fields": [
            {
                "type": "radio",
                "label": "Pain?",
                "name": "pain",
                "options": ["Yes", "No"],
                "required": True,
                "conditions": {
                    "Yes": [{"type": "text", "label": "Where", "name": "where", "required": True}],
                },
            },
        ],
    }


@pytest.fixture
def flat_schema():
    """No conditional logic at all."""
    return {
        "title": "Flat",
        "fields": [
            {"type": "text", "label": "Name", "name": "name"},
            {"type": "radio", "label": "Agree?", "name": "agree", "options": ["Yes", "No"]},
        ],
    }


@pytest.fixture
def copy_of():
    return copy.deepcopy


@pytest.fixture(autouse=True)
def restore_config():
    """Keep config edits local to a test."""
    saved = copy.copy(get_config())
    yield
    update_config(**vars(saved))
