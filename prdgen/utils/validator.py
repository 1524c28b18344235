"""Input validation — checks that the product idea is a non-empty string before generation."""


class GenerationError(Exception):
    """The PRD could not be generated: the model call failed or returned unusable data."""


class EmptyIdeaError(GenerationError, ValueError):
    """The product idea is empty or whitespace-only."""


def validate_idea(idea: str) -> str:
    """Validate that the product idea is a non-empty string.

    Returns the stripped input on success.
    Raises EmptyIdeaError if input is empty or whitespace-only.
    """
    if not isinstance(idea, str) or not idea.strip():
        raise EmptyIdeaError("Product idea must be a non-empty string.")
    return idea.strip()
