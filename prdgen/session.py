"""Session state — the single record a UI holds between events.

State is passed in and a new record is returned; nothing here touches
globals, so the dashboard and the tests drive the same transitions.
"""

import sys
from typing import Callable, TypedDict

from prdgen.generator import generate_prd
from prdgen.schema import PRD
from prdgen.utils.validator import EmptyIdeaError

EMPTY_IDEA_MESSAGE = "Please enter a product idea."
GENERATION_FAILED_MESSAGE = "Failed to generate PRD. Please check your API key and try again."


class SessionState(TypedDict):
    idea: str  # Last idea submitted for generation.
    document: PRD | None  # Current PRD. Replaced wholesale on successful generation.
    is_generating: bool  # True while a generation call is in flight.
    error: str | None  # User-facing message from the last failed action.


def new_session() -> SessionState:
    return {"idea": "", "document": None, "is_generating": False, "error": None}


def begin_generation(state: SessionState, idea: str) -> SessionState:
    """Mark a generation as started, or record why it cannot start.

    A blank idea sets the empty-input message and changes nothing else.
    A request while another generation is in flight is ignored.
    """
    if state["is_generating"]:
        return state
    if not isinstance(idea, str) or not idea.strip():
        return {**state, "error": EMPTY_IDEA_MESSAGE}
    return {**state, "idea": idea.strip(), "is_generating": True, "error": None}


def finish_generation(
    state: SessionState, document: PRD | None = None, error: str | None = None
) -> SessionState:
    """Clear the in-flight flag and apply the outcome.

    On success the new document replaces the old one; on failure the old
    document is kept and the error message is set.
    """
    if document is None:
        return {**state, "is_generating": False, "error": error or GENERATION_FAILED_MESSAGE}
    return {**state, "document": document, "is_generating": False, "error": None}


def complete_generation(
    state: SessionState, generate: Callable[[str], PRD] = generate_prd
) -> SessionState:
    """Call the generator for a started generation and apply the result.

    Any failure, expected or not, becomes a user-facing message; the
    current document is never replaced by a partial result.
    """
    if not state["is_generating"]:
        return state

    try:
        document = generate(state["idea"])
    except EmptyIdeaError:
        return finish_generation(state, error=EMPTY_IDEA_MESSAGE)
    except Exception as exc:
        print(f"[PRD] Generation failed: {exc!r}", file=sys.stderr)
        return finish_generation(state, error=GENERATION_FAILED_MESSAGE)
    return finish_generation(state, document=document)


def run_generation(
    state: SessionState, idea: str, generate: Callable[[str], PRD] = generate_prd
) -> SessionState:
    """Run one full generate action: validate, call the generator, apply the result."""
    if state["is_generating"]:
        return state
    return complete_generation(begin_generation(state, idea), generate)


def apply_edit(state: SessionState, operation: Callable[..., PRD], *args) -> SessionState:
    """Apply one editor operation to the current document.

    operation is any prdgen.editor function; args follow its document argument.
    Without a document there is nothing to edit and the state is returned as is.
    """
    if state["document"] is None:
        return state
    return {**state, "document": operation(state["document"], *args)}
