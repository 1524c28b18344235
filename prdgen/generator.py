"""PRD Generator — turns a short product idea into a structured PRD via a chat model.

One call to the configured model per request. The response must be a JSON
object matching PRD_SCHEMA; anything else (transport error, malformed JSON,
missing fields) surfaces as a GenerationError and nothing partial is returned.
"""

import json
import sys

from langchain_anthropic import ChatAnthropic
from langchain_google_genai import ChatGoogleGenerativeAI

from prdgen.config import get_config
from prdgen.schema import PRD, PRD_SCHEMA, validate_document
from prdgen.utils.parsing import response_text, strip_fences
from prdgen.utils.validator import EmptyIdeaError, GenerationError, validate_idea

__all__ = ["EmptyIdeaError", "GenerationError", "build_prompt", "generate_prd"]

SYSTEM_PROMPT = f"""\
You are a senior product manager writing a Product Requirements Document (PRD) \
for your engineering and design teams.

You MUST respond with a single JSON object matching this JSON schema:
{json.dumps(PRD_SCHEMA, indent=2)}

Rules:
- Every property is required. Use an empty list rather than omitting a list.
- priority is exactly one of: High, Medium, Low.
- User stories follow the form "As a <role>, I want <goal>, so that <benefit>".
- Respond ONLY with the JSON object. No markdown fences, no commentary.
"""


def build_prompt(idea: str) -> str:
    """Construct the user prompt for a validated product idea."""
    return (
        "Based on the following product idea, generate a comprehensive Product "
        "Requirements Document (PRD).\n"
        "Act as a senior product manager creating a clear, concise, and well-structured "
        "document for your engineering and design teams.\n"
        "Flesh out the details logically and professionally. Ensure user stories are "
        "correctly formatted.\n\n"
        f'Product Idea: "{idea}"'
    )


def _build_llm(config: dict):
    """Instantiate the chat model named in config."""
    provider = config.get("model_provider", "google")
    model_name = config["generator_model"]
    temperature = config.get("temperature", 0)

    if provider == "google":
        return ChatGoogleGenerativeAI(
            model=model_name,
            temperature=temperature,
            response_mime_type="application/json",
            response_schema=PRD_SCHEMA,
        )
    if provider == "anthropic":
        return ChatAnthropic(model=model_name, temperature=temperature)
    raise ValueError(f"Unknown model_provider '{provider}'. Must be 'google' or 'anthropic'.")


def generate_prd(idea: str) -> PRD:
    """Generate a PRD for a product idea.

    Raises EmptyIdeaError (before any model call) when the idea is blank, and
    GenerationError when the model call fails or its response is not a valid PRD.
    """
    validated = validate_idea(idea)
    config = get_config()

    messages = [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_prompt(validated)},
    ]

    print(f"[PRD] Generating PRD with {config.get('generator_model')}...", file=sys.stderr)
    try:
        llm = _build_llm(config)
        response = llm.invoke(messages)
        data = json.loads(strip_fences(response_text(response)))
        return validate_document(data)
    except Exception as exc:
        print(f"[PRD] Error generating or parsing PRD: {exc!r}", file=sys.stderr)
        raise GenerationError("Failed to get a valid PRD from the AI model.") from exc
