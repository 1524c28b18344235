"""PRD Schema — the shape of the generated document and its validation.

The same structure is described three ways: TypedDicts for the editor and
dashboard, PRD_SCHEMA for the model request, and validate_document() for
checking what comes back.
"""

from typing import Literal, TypedDict

Priority = Literal["High", "Medium", "Low"]
PRIORITIES = ("High", "Medium", "Low")


class Introduction(TypedDict):
    problemStatement: str
    solution: str
    targetAudience: str


class UserPersona(TypedDict):
    name: str
    demographics: str
    goals: list[str]
    frustrations: list[str]


class Feature(TypedDict):
    featureName: str
    description: str
    userStories: list[str]  # "As a <role>, I want <goal>, so that <benefit>"
    priority: Priority


class NonFunctionalRequirement(TypedDict):
    requirement: str
    details: str


class PRD(TypedDict):
    title: str
    introduction: Introduction
    userPersonas: list[UserPersona]
    features: list[Feature]
    nonFunctionalRequirements: list[NonFunctionalRequirement]
    successMetrics: list[str]


# Field order of every record, as listed above. Export relies on this order.
INTRODUCTION_FIELDS = ("problemStatement", "solution", "targetAudience")
PERSONA_FIELDS = ("name", "demographics", "goals", "frustrations")
FEATURE_FIELDS = ("featureName", "description", "userStories", "priority")
REQUIREMENT_FIELDS = ("requirement", "details")
PRD_FIELDS = (
    "title",
    "introduction",
    "userPersonas",
    "features",
    "nonFunctionalRequirements",
    "successMetrics",
)

_STRING = {"type": "string"}
_STRING_LIST = {"type": "array", "items": _STRING}


def _object(properties: dict) -> dict:
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
    }


PRD_SCHEMA = _object({
    "title": {"type": "string", "description": "A concise, catchy title for the product."},
    "introduction": _object({
        "problemStatement": {"type": "string", "description": "The problem the product solves."},
        "solution": {"type": "string", "description": "How the product solves the problem."},
        "targetAudience": {"type": "string", "description": "Who the product is for."},
    }),
    "userPersonas": {
        "type": "array",
        "items": _object({
            "name": _STRING,
            "demographics": _STRING,
            "goals": _STRING_LIST,
            "frustrations": _STRING_LIST,
        }),
    },
    "features": {
        "type": "array",
        "items": _object({
            "featureName": _STRING,
            "description": _STRING,
            "userStories": {
                "type": "array",
                "items": _STRING,
                "description": "Each story in the form 'As a <role>, I want <goal>, so that <benefit>'.",
            },
            "priority": {"type": "string", "enum": list(PRIORITIES)},
        }),
    },
    "nonFunctionalRequirements": {
        "type": "array",
        "items": _object({
            "requirement": {"type": "string", "description": "Short label, e.g. Performance, Security."},
            "details": _STRING,
        }),
    },
    "successMetrics": _STRING_LIST,
})

# Map common LLM priority spellings to the canonical label
_PRIORITY_ALIASES = {
    "high": "High",
    "medium": "Medium",
    "med": "Medium",
    "normal": "Medium",
    "low": "Low",
}


def normalize_priority(value) -> Priority:
    """Return the canonical Priority label for value.

    Raises ValueError if value is not a recognizable priority.
    """
    if value in PRIORITIES:
        return value
    if isinstance(value, str):
        normalized = _PRIORITY_ALIASES.get(value.strip().lower())
        if normalized:
            return normalized
    raise ValueError(f"Invalid priority {value!r}. Must be one of: {PRIORITIES}")


def _require_str(value, path: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"'{path}' must be a string, got {type(value).__name__}.")
    return value


def _require_str_list(value, path: str) -> list[str]:
    if not isinstance(value, list):
        raise ValueError(f"'{path}' must be a list, got {type(value).__name__}.")
    return [_require_str(item, f"{path}[{i}]") for i, item in enumerate(value)]


def _require_record(value, fields: tuple, path: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"'{path}' must be an object, got {type(value).__name__}.")
    missing = [f for f in fields if f not in value]
    if missing:
        raise ValueError(f"'{path}' missing required fields: {missing}")
    return value


def _require_records(value, fields: tuple, path: str) -> list[dict]:
    if not isinstance(value, list):
        raise ValueError(f"'{path}' must be a list, got {type(value).__name__}.")
    return [_require_record(item, fields, f"{path}[{i}]") for i, item in enumerate(value)]


def validate_document(data) -> PRD:
    """Validate a parsed PRD object and return a clean copy of it.

    Every field of PRD_SCHEMA must be present with the right type; lists may
    be empty. Priorities are normalized to their canonical label and keys
    outside the schema are dropped.

    Raises ValueError naming the first offending path.
    """
    root = _require_record(data, PRD_FIELDS, "PRD")
    intro = _require_record(root["introduction"], INTRODUCTION_FIELDS, "introduction")

    personas = []
    for i, p in enumerate(_require_records(root["userPersonas"], PERSONA_FIELDS, "userPersonas")):
        path = f"userPersonas[{i}]"
        personas.append({
            "name": _require_str(p["name"], f"{path}.name"),
            "demographics": _require_str(p["demographics"], f"{path}.demographics"),
            "goals": _require_str_list(p["goals"], f"{path}.goals"),
            "frustrations": _require_str_list(p["frustrations"], f"{path}.frustrations"),
        })

    features = []
    for i, f in enumerate(_require_records(root["features"], FEATURE_FIELDS, "features")):
        path = f"features[{i}]"
        try:
            priority = normalize_priority(f["priority"])
        except ValueError as exc:
            raise ValueError(f"'{path}.priority': {exc}") from exc
        features.append({
            "featureName": _require_str(f["featureName"], f"{path}.featureName"),
            "description": _require_str(f["description"], f"{path}.description"),
            "userStories": _require_str_list(f["userStories"], f"{path}.userStories"),
            "priority": priority,
        })

    requirements = []
    records = _require_records(
        root["nonFunctionalRequirements"], REQUIREMENT_FIELDS, "nonFunctionalRequirements"
    )
    for i, r in enumerate(records):
        path = f"nonFunctionalRequirements[{i}]"
        requirements.append({
            "requirement": _require_str(r["requirement"], f"{path}.requirement"),
            "details": _require_str(r["details"], f"{path}.details"),
        })

    return {
        "title": _require_str(root["title"], "title"),
        "introduction": {
            field: _require_str(intro[field], f"introduction.{field}")
            for field in INTRODUCTION_FIELDS
        },
        "userPersonas": personas,
        "features": features,
        "nonFunctionalRequirements": requirements,
        "successMetrics": _require_str_list(root["successMetrics"], "successMetrics"),
    }
