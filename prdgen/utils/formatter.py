"""Output Formatter — canonical JSON export of a PRD and a Markdown rendering."""

import json

from prdgen.schema import (
    FEATURE_FIELDS,
    INTRODUCTION_FIELDS,
    PERSONA_FIELDS,
    PRD,
    REQUIREMENT_FIELDS,
    validate_document,
)


def _ordered(record: dict, fields: tuple) -> dict:
    return {field: record[field] for field in fields}


def export_json(prd: PRD) -> str:
    """Serialize a PRD to canonical JSON text.

    Keys follow the schema's field order regardless of the order in the
    input dict, lists keep their order, and priorities are written as their
    labels.
    """
    canonical = {
        "title": prd["title"],
        "introduction": _ordered(prd["introduction"], INTRODUCTION_FIELDS),
        "userPersonas": [_ordered(p, PERSONA_FIELDS) for p in prd["userPersonas"]],
        "features": [_ordered(f, FEATURE_FIELDS) for f in prd["features"]],
        "nonFunctionalRequirements": [
            _ordered(r, REQUIREMENT_FIELDS) for r in prd["nonFunctionalRequirements"]
        ],
        "successMetrics": list(prd["successMetrics"]),
    }
    return json.dumps(canonical, indent=2, ensure_ascii=False)


def parse_json(text: str) -> PRD:
    """Parse exported JSON text back into a validated PRD.

    Raises ValueError (json.JSONDecodeError is a subclass) on bad input.
    """
    return validate_document(json.loads(text))


def render_markdown(prd: PRD) -> str:
    """Convert a PRD into a readable Markdown document."""
    lines = []

    title = prd.get("title") or "Untitled Product"
    lines.append(f"# {title} — Product Requirements Document")
    lines.append("")

    intro = prd.get("introduction", {})
    lines.append("## Introduction")
    lines.append("")
    for label, key in (
        ("Problem Statement", "problemStatement"),
        ("Solution", "solution"),
        ("Target Audience", "targetAudience"),
    ):
        lines.append(f"### {label}")
        lines.append("")
        lines.append(intro.get(key, ""))
        lines.append("")

    personas = prd.get("userPersonas", [])
    if personas:
        lines.append("## User Personas")
        lines.append("")
        for persona in personas:
            lines.append(f"### {persona.get('name', 'Unnamed Persona')}")
            lines.append("")
            if persona.get("demographics"):
                lines.append(f"*{persona['demographics']}*")
                lines.append("")
            goals = persona.get("goals", [])
            if goals:
                lines.append("**Goals:**")
                lines.append("")
                for goal in goals:
                    lines.append(f"- {goal}")
                lines.append("")
            frustrations = persona.get("frustrations", [])
            if frustrations:
                lines.append("**Frustrations:**")
                lines.append("")
                for frustration in frustrations:
                    lines.append(f"- {frustration}")
                lines.append("")

    features = prd.get("features", [])
    if features:
        lines.append("## Features")
        lines.append("")
        lines.append("| Feature | Priority |")
        lines.append("|---------|----------|")
        for feature in features:
            name = feature.get("featureName", "").replace("|", "\\|")
            lines.append(f"| {name} | {feature.get('priority', '')} |")
        lines.append("")

        for feature in features:
            lines.append(f"### {feature.get('featureName', 'Unnamed Feature')}")
            lines.append("")
            lines.append(f"- **Priority:** {feature.get('priority', '')}")
            lines.append("")
            if feature.get("description"):
                lines.append(feature["description"])
                lines.append("")
            stories = feature.get("userStories", [])
            if stories:
                lines.append("**User Stories:**")
                lines.append("")
                for story in stories:
                    lines.append(f"- *{story}*")
                lines.append("")

    requirements = prd.get("nonFunctionalRequirements", [])
    if requirements:
        lines.append("## Non-Functional Requirements")
        lines.append("")
        for req in requirements:
            lines.append(f"- **{req.get('requirement', '')}:** {req.get('details', '')}")
        lines.append("")

    metrics = prd.get("successMetrics", [])
    if metrics:
        lines.append("## Success Metrics")
        lines.append("")
        for metric in metrics:
            lines.append(f"- {metric}")
        lines.append("")

    return "\n".join(lines)
