"""Document Editor — copy-on-write mutations over a PRD.

Every operation takes the current document and returns a new one. The
document passed in, and everything reachable from it, is left untouched, so
callers can keep earlier snapshots around and compare them.

Sections form a closed set of four kinds: three record lists (personas,
features, non-functional requirements) and the plain-text success metrics.
Items have no ids; an index is always a position in the current list.
An index outside the list makes the operation a no-op.
"""

import copy
import re
from typing import Literal

from prdgen.schema import (
    INTRODUCTION_FIELDS,
    PRD,
    Feature,
    NonFunctionalRequirement,
    UserPersona,
    normalize_priority,
)

Section = Literal["userPersonas", "features", "nonFunctionalRequirements", "successMetrics"]
RecordSection = Literal["userPersonas", "features", "nonFunctionalRequirements"]
NestedKey = Literal["goals", "frustrations", "userStories"]

RECORD_SECTIONS = ("userPersonas", "features", "nonFunctionalRequirements")
SECTIONS = RECORD_SECTIONS + ("successMetrics",)

# Scalar (text / enum) fields editable on each record section
RECORD_FIELDS = {
    "userPersonas": ("name", "demographics"),
    "features": ("featureName", "description", "priority"),
    "nonFunctionalRequirements": ("requirement", "details"),
}

# Nested text lists owned by each record section
NESTED_LISTS = {
    "userPersonas": ("goals", "frustrations"),
    "features": ("userStories",),
}

DEFAULT_METRIC = "New metric"


def new_persona() -> UserPersona:
    return {
        "name": "New Persona",
        "demographics": "Demographics",
        "goals": ["New Goal"],
        "frustrations": ["New Frustration"],
    }


def new_feature() -> Feature:
    return {
        "featureName": "New Feature",
        "description": "Feature description",
        "userStories": ["As a user..."],
        "priority": "Medium",
    }


def new_requirement() -> NonFunctionalRequirement:
    return {"requirement": "New Requirement", "details": "Details of requirement"}


_DEFAULT_FACTORIES = {
    "userPersonas": new_persona,
    "features": new_feature,
    "nonFunctionalRequirements": new_requirement,
    "successMetrics": lambda: DEFAULT_METRIC,
}


# ---------------------------------------------------------------------------
# Guards
# ---------------------------------------------------------------------------


def _check_section(section: str, allowed: tuple) -> None:
    if section not in allowed:
        raise ValueError(f"Unknown section '{section}'. Must be one of: {allowed}")


def _check_field(section: str, field: str) -> None:
    if field not in RECORD_FIELDS[section]:
        raise ValueError(
            f"'{field}' is not an editable field of {section}. "
            f"Must be one of: {RECORD_FIELDS[section]}"
        )


def _check_nested_key(section: str, key: str) -> None:
    _check_section(section, tuple(NESTED_LISTS))
    if key not in NESTED_LISTS[section]:
        raise ValueError(
            f"'{key}' is not a nested list of {section}. Must be one of: {NESTED_LISTS[section]}"
        )


def _in_range(items: list, index: int) -> bool:
    return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < len(items)


# ---------------------------------------------------------------------------
# Top-level fields
# ---------------------------------------------------------------------------


def update_title(prd: PRD, value: str) -> PRD:
    new_prd = copy.deepcopy(prd)
    new_prd["title"] = value
    return new_prd


def update_introduction(prd: PRD, field: str, value: str) -> PRD:
    """Replace one of problemStatement / solution / targetAudience."""
    if field not in INTRODUCTION_FIELDS:
        raise ValueError(
            f"'{field}' is not an introduction field. Must be one of: {INTRODUCTION_FIELDS}"
        )
    new_prd = copy.deepcopy(prd)
    new_prd["introduction"][field] = value
    return new_prd


# ---------------------------------------------------------------------------
# Section items
# ---------------------------------------------------------------------------


def update_item(prd: PRD, section: RecordSection, index: int, field: str, value: str) -> PRD:
    """Replace one scalar field on the record at index.

    A priority value is normalized to its canonical label; anything that is
    not a priority raises ValueError.
    """
    _check_section(section, RECORD_SECTIONS)
    _check_field(section, field)
    if field == "priority":
        value = normalize_priority(value)

    new_prd = copy.deepcopy(prd)
    items = new_prd[section]
    if _in_range(items, index):
        items[index][field] = value
    return new_prd


def update_metric(prd: PRD, index: int, value: str) -> PRD:
    new_prd = copy.deepcopy(prd)
    metrics = new_prd["successMetrics"]
    if _in_range(metrics, index):
        metrics[index] = value
    return new_prd


def add_item(prd: PRD, section: Section) -> PRD:
    """Append the section's default item."""
    _check_section(section, SECTIONS)
    new_prd = copy.deepcopy(prd)
    new_prd[section].append(_DEFAULT_FACTORIES[section]())
    return new_prd


def remove_item(prd: PRD, section: Section, index: int) -> PRD:
    """Delete the item at index; later items shift down by one."""
    _check_section(section, SECTIONS)
    new_prd = copy.deepcopy(prd)
    items = new_prd[section]
    if _in_range(items, index):
        del items[index]
    return new_prd


# ---------------------------------------------------------------------------
# Nested lists (goals, frustrations, userStories)
# ---------------------------------------------------------------------------


def update_nested_item(
    prd: PRD,
    section: RecordSection,
    index: int,
    key: NestedKey,
    nested_index: int,
    value: str,
) -> PRD:
    _check_nested_key(section, key)
    new_prd = copy.deepcopy(prd)
    items = new_prd[section]
    if _in_range(items, index):
        nested = items[index][key]
        if _in_range(nested, nested_index):
            nested[nested_index] = value
    return new_prd


def add_nested_item(prd: PRD, section: RecordSection, index: int, key: NestedKey) -> PRD:
    """Append an empty entry to a nested list."""
    _check_nested_key(section, key)
    new_prd = copy.deepcopy(prd)
    items = new_prd[section]
    if _in_range(items, index):
        items[index][key].append("")
    return new_prd


def remove_nested_item(
    prd: PRD, section: RecordSection, index: int, key: NestedKey, nested_index: int
) -> PRD:
    _check_nested_key(section, key)
    new_prd = copy.deepcopy(prd)
    items = new_prd[section]
    if _in_range(items, index):
        nested = items[index][key]
        if _in_range(nested, nested_index):
            del nested[nested_index]
    return new_prd


# ---------------------------------------------------------------------------
# Typed per-section wrappers
# ---------------------------------------------------------------------------


def add_persona(prd: PRD) -> PRD:
    return add_item(prd, "userPersonas")


def add_feature(prd: PRD) -> PRD:
    return add_item(prd, "features")


def add_requirement(prd: PRD) -> PRD:
    return add_item(prd, "nonFunctionalRequirements")


def add_metric(prd: PRD) -> PRD:
    return add_item(prd, "successMetrics")


def update_persona(prd: PRD, index: int, field: Literal["name", "demographics"], value: str) -> PRD:
    return update_item(prd, "userPersonas", index, field, value)


def update_feature(
    prd: PRD, index: int, field: Literal["featureName", "description", "priority"], value: str
) -> PRD:
    return update_item(prd, "features", index, field, value)


def update_requirement(
    prd: PRD, index: int, field: Literal["requirement", "details"], value: str
) -> PRD:
    return update_item(prd, "nonFunctionalRequirements", index, field, value)


# ---------------------------------------------------------------------------
# Path-based updates
# ---------------------------------------------------------------------------

_PATH_RE = re.compile(
    r"^(?P<root>\w+)(?:\[(?P<index>\d+)\])?(?:\.(?P<field>\w+)(?:\[(?P<nested>\d+)\])?)?$"
)


def update_field(prd: PRD, path: str, value: str) -> PRD:
    """Replace the text or enum value at path.

    Accepted forms:
        title
        introduction.<field>
        successMetrics[i]
        <section>[i].<field>
        <section>[i].<nestedKey>[j]

    Raises ValueError if the path does not name a scalar value.
    """
    match = _PATH_RE.match(path.strip())
    if not match:
        raise ValueError(f"Malformed path '{path}'.")

    root = match.group("root")
    index = match.group("index")
    field = match.group("field")
    nested = match.group("nested")

    if root == "title" and index is None and field is None:
        return update_title(prd, value)
    if root == "introduction" and index is None and field and nested is None:
        return update_introduction(prd, field, value)
    if root == "successMetrics" and index is not None and field is None:
        return update_metric(prd, int(index), value)
    if root in RECORD_SECTIONS and index is not None and field:
        if nested is None:
            return update_item(prd, root, int(index), field, value)
        return update_nested_item(prd, root, int(index), field, int(nested), value)

    raise ValueError(f"Path '{path}' does not name an editable field.")
