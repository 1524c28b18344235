"""Centralized config loading — read once at import time.

Values come from prdgen/config.yaml, then PRDGEN_* environment variables
(also read from a project-root .env) override the model settings.
"""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

# Load .env from project root (parent of prdgen/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

CONFIG_PATH = Path(__file__).resolve().parent / "config.yaml"

_DEFAULTS = {
    "model_provider": "google",
    "generator_model": "gemini-2.5-flash",
    "temperature": 0,
    "example_ideas": [],
}

# Environment variable -> (config key, type)
_ENV_OVERRIDES = {
    "PRDGEN_MODEL_PROVIDER": ("model_provider", str),
    "PRDGEN_MODEL": ("generator_model", str),
    "PRDGEN_TEMPERATURE": ("temperature", float),
}


def _load() -> dict:
    config = {**_DEFAULTS, **(yaml.safe_load(CONFIG_PATH.read_text()) or {})}
    for env_name, (key, cast) in _ENV_OVERRIDES.items():
        raw = os.environ.get(env_name)
        if raw:
            config[key] = cast(raw)
    return config


_config = _load()


def get_config() -> dict:
    """Return the loaded config dictionary."""
    return _config
