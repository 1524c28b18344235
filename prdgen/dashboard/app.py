"""PRD Generator — Streamlit UI for generating and editing Product Requirements Documents."""

import sys
from pathlib import Path

# Add project root to path so 'prdgen' package is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

import streamlit as st

from prdgen import editor
from prdgen.config import get_config
from prdgen.generator import generate_prd
from prdgen.schema import PRIORITIES
from prdgen.session import apply_edit, begin_generation, complete_generation, new_session
from prdgen.utils.formatter import export_json, render_markdown

st.set_page_config(page_title="PRD Generator", layout="wide")
st.title("Describe Your Product Idea")
st.markdown("Enter a description, and let AI craft a detailed PRD for you.")

if "prd_session" not in st.session_state:
    st.session_state["prd_session"] = new_session()
    # Bumped whenever list shapes change so index-based widget keys start fresh
    st.session_state["prd_rev"] = 0


# ---------------------------------------------------------------------------
# Callbacks — every edit goes through the editor and replaces the session record
# ---------------------------------------------------------------------------


def _session():
    return st.session_state["prd_session"]


def _on_text_change(key: str, operation, *args) -> None:
    """Apply an in-place text/enum edit using the widget's new value."""
    value = st.session_state[key]
    st.session_state["prd_session"] = apply_edit(_session(), operation, *args, value)


def _on_structure_change(operation, *args) -> None:
    """Apply an add/remove edit; widgets for the affected lists are rebuilt."""
    st.session_state["prd_session"] = apply_edit(_session(), operation, *args)
    st.session_state["prd_rev"] += 1


def _use_example(example: str) -> None:
    st.session_state["idea_input"] = example


# ---------------------------------------------------------------------------
# Widget helpers
# ---------------------------------------------------------------------------


def _key(path: str) -> str:
    return f"{st.session_state['prd_rev']}:{path}"


def _text(label: str, value: str, path: str, operation, *args, area: bool = True, **kwargs) -> None:
    """Render a text widget bound to one field of the document."""
    key = _key(path)
    widget = st.text_area if area else st.text_input
    widget(
        label,
        value=value,
        key=key,
        on_change=_on_text_change,
        args=(key, operation, *args),
        **kwargs,
    )


def _remove_button(label: str, path: str, operation, *args) -> None:
    st.button(label, key=_key(f"remove:{path}"), on_click=_on_structure_change, args=(operation, *args))


def _add_button(label: str, path: str, operation, *args) -> None:
    st.button(label, key=_key(f"add:{path}"), on_click=_on_structure_change, args=(operation, *args))


def _nested_list(
    title: str, add_label: str, section: str, index: int, nested_key: str, items: list[str], placeholder: str
) -> None:
    """Render an editable nested list (goals, frustrations, user stories)."""
    st.markdown(f"**{title}**")
    for j, item in enumerate(items):
        path = f"{section}[{index}].{nested_key}[{j}]"
        col_text, col_remove = st.columns([12, 1])
        with col_text:
            _text(
                f"{title} {j + 1}", item, path,
                editor.update_nested_item, section, index, nested_key, j,
                area=False, placeholder=placeholder, label_visibility="collapsed",
            )
        with col_remove:
            _remove_button("✕", path, editor.remove_nested_item, section, index, nested_key, j)
    _add_button(add_label, f"{section}[{index}].{nested_key}", editor.add_nested_item, section, index, nested_key)


# ---------------------------------------------------------------------------
# Document renderers
# ---------------------------------------------------------------------------


def _render_introduction(prd: dict) -> None:
    st.subheader("Introduction")
    for label, field in (
        ("Problem Statement", "problemStatement"),
        ("Solution", "solution"),
        ("Target Audience", "targetAudience"),
    ):
        _text(label, prd["introduction"][field], f"introduction.{field}", editor.update_introduction, field)


def _render_personas(prd: dict) -> None:
    st.subheader("User Personas")
    for i, persona in enumerate(prd["userPersonas"]):
        with st.container(border=True):
            col_name, col_remove = st.columns([12, 1])
            with col_name:
                _text("Name", persona["name"], f"userPersonas[{i}].name",
                      editor.update_item, "userPersonas", i, "name", area=False)
            with col_remove:
                _remove_button("🗑", f"userPersonas[{i}]", editor.remove_item, "userPersonas", i)
            _text("Demographics", persona["demographics"], f"userPersonas[{i}].demographics",
                  editor.update_item, "userPersonas", i, "demographics")
            col_goals, col_frustrations = st.columns(2)
            with col_goals:
                _nested_list("Goals", "Add Goal", "userPersonas", i, "goals", persona["goals"], "Enter goal...")
            with col_frustrations:
                _nested_list("Frustrations", "Add Frustration", "userPersonas", i, "frustrations",
                             persona["frustrations"], "Enter frustration...")
    _add_button("Add Persona", "userPersonas", editor.add_item, "userPersonas")


def _render_features(prd: dict) -> None:
    st.subheader("Features")
    for i, feature in enumerate(prd["features"]):
        with st.container(border=True):
            col_name, col_priority, col_remove = st.columns([9, 3, 1])
            with col_name:
                _text("Feature", feature["featureName"], f"features[{i}].featureName",
                      editor.update_item, "features", i, "featureName", area=False)
            with col_priority:
                key = _key(f"features[{i}].priority")
                st.selectbox(
                    "Priority",
                    PRIORITIES,
                    index=PRIORITIES.index(feature["priority"]),
                    key=key,
                    on_change=_on_text_change,
                    args=(key, editor.update_item, "features", i, "priority"),
                )
            with col_remove:
                _remove_button("🗑", f"features[{i}]", editor.remove_item, "features", i)
            _text("Description", feature["description"], f"features[{i}].description",
                  editor.update_item, "features", i, "description")
            _nested_list("User Stories", "Add User Story", "features", i, "userStories", feature["userStories"], "As a user...")
    _add_button("Add Feature", "features", editor.add_item, "features")


def _render_requirements(prd: dict) -> None:
    st.subheader("Non-Functional Requirements")
    for i, req in enumerate(prd["nonFunctionalRequirements"]):
        with st.container(border=True):
            col_name, col_remove = st.columns([12, 1])
            with col_name:
                _text("Requirement", req["requirement"], f"nonFunctionalRequirements[{i}].requirement",
                      editor.update_item, "nonFunctionalRequirements", i, "requirement", area=False)
            with col_remove:
                _remove_button("🗑", f"nonFunctionalRequirements[{i}]",
                               editor.remove_item, "nonFunctionalRequirements", i)
            _text("Details", req["details"], f"nonFunctionalRequirements[{i}].details",
                  editor.update_item, "nonFunctionalRequirements", i, "details")
    _add_button("Add Requirement", "nonFunctionalRequirements", editor.add_item, "nonFunctionalRequirements")


def _render_metrics(prd: dict) -> None:
    st.subheader("Success Metrics")
    for i, metric in enumerate(prd["successMetrics"]):
        col_text, col_remove = st.columns([12, 1])
        with col_text:
            _text(f"Metric {i + 1}", metric, f"successMetrics[{i}]", editor.update_metric, i,
                  area=False, label_visibility="collapsed")
        with col_remove:
            _remove_button("✕", f"successMetrics[{i}]", editor.remove_item, "successMetrics", i)
    _add_button("Add Metric", "successMetrics", editor.add_item, "successMetrics")


def _render_document(prd: dict) -> None:
    """Render the editable PRD and its export actions."""
    _text("Title", prd["title"], "title", editor.update_title, area=False)

    prd_json = export_json(prd)
    col_json, col_md = st.columns(2)
    with col_json:
        st.download_button("Download JSON", data=prd_json, file_name="prd.json", mime="application/json")
    with col_md:
        st.download_button("Download Markdown", data=render_markdown(prd),
                           file_name="prd.md", mime="text/markdown")

    st.divider()
    _render_introduction(prd)
    _render_personas(prd)
    _render_features(prd)
    _render_requirements(prd)
    _render_metrics(prd)

    with st.expander("View PRD (JSON)"):
        st.code(prd_json, language="json")


# ---------------------------------------------------------------------------
# Page logic — driven by the session record
# ---------------------------------------------------------------------------

session = _session()

idea = st.text_area(
    "Product idea",
    height=130,
    key="idea_input",
    placeholder="e.g., A mobile app that connects local home cooks with people looking for homemade meals.",
    disabled=session["is_generating"],
)

st.caption("Or try an example:")
example_cols = st.columns(2)
for n, example in enumerate(get_config().get("example_ideas", [])):
    with example_cols[n % 2]:
        st.button(example, key=f"example_{n}", on_click=_use_example, args=(example,),
                  disabled=session["is_generating"])

if st.button("Generate PRD", type="primary", disabled=session["is_generating"]):
    st.session_state["prd_session"] = begin_generation(session, idea)
    st.rerun()

if session["is_generating"]:
    with st.spinner("AI is thinking... Great product docs are worth the wait!"):
        finished = complete_generation(session, generate_prd)
    if finished["document"] is not session["document"]:
        st.session_state["prd_rev"] += 1
    st.session_state["prd_session"] = finished
    st.rerun()

if session["error"]:
    st.error(f"Oops! {session['error']}")

if session["document"] is not None:
    st.divider()
    _render_document(session["document"])
