"""Shared fixtures for the PRD generator test suite."""

import pytest
from unittest.mock import patch


@pytest.fixture
def sample_prd():
    """Complete valid PRD with every section populated."""
    return {
        "title": "SeedSwap",
        "introduction": {
            "problemStatement": "Gardeners end up with more seeds than they can plant.",
            "solution": "A local marketplace for trading seeds and produce.",
            "targetAudience": "Home gardeners and allotment holders.",
        },
        "userPersonas": [
            {
                "name": "Maria",
                "demographics": "42, suburban, keen vegetable grower",
                "goals": ["Grow vegetables", "Meet other gardeners"],
                "frustrations": ["Wasted surplus seeds"],
            },
            {
                "name": "Tom",
                "demographics": "27, city flat with a balcony",
                "goals": ["Find herb seedlings"],
                "frustrations": ["Garden centres are far away", "Packets are too large"],
            },
        ],
        "features": [
            {
                "featureName": "Seed Listings",
                "description": "Post seeds available for trade.",
                "userStories": [
                    "As a gardener, I want to list my spare seeds, so that others can find them."
                ],
                "priority": "High",
            },
            {
                "featureName": "Trade Chat",
                "description": "Message other gardeners to arrange a swap.",
                "userStories": [],
                "priority": "Low",
            },
        ],
        "nonFunctionalRequirements": [
            {"requirement": "Performance", "details": "Listings load in under 2 seconds."},
            {"requirement": "Privacy", "details": "Exact addresses are never shown."},
        ],
        "successMetrics": ["1,000 trades in the first quarter", "40% monthly retention"],
    }


@pytest.fixture
def mock_config():
    """Patch the config singleton with test-friendly values."""
    test_config = {
        "model_provider": "google",
        "generator_model": "gemini-2.5-flash",
        "temperature": 0,
        "example_ideas": ["A smart water bottle."],
    }
    with patch("prdgen.config._config", test_config):
        yield test_config
