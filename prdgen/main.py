"""Entry point: validates the idea, generates a PRD, prints it as JSON or Markdown."""

import sys

from prdgen.generator import GenerationError, generate_prd
from prdgen.utils.formatter import export_json, render_markdown


def run(idea: str, markdown: bool = False) -> str:
    """Generate a PRD for idea and return it in the requested text form.

    Args:
        idea: The user's product idea.
        markdown: Render Markdown instead of canonical JSON.
    """
    prd = generate_prd(idea)
    return render_markdown(prd) if markdown else export_json(prd)


def main() -> None:
    """CLI entry point — accepts the idea as arguments or from stdin."""
    markdown = False
    args = sys.argv[1:]

    if "--markdown" in args:
        markdown = True
        args.remove("--markdown")

    if args:
        idea = " ".join(args)
    else:
        print("Enter your product idea (Ctrl+D / Ctrl+Z to submit):", file=sys.stderr)
        idea = sys.stdin.read()

    try:
        output = run(idea, markdown=markdown)
    except GenerationError as exc:
        print(f"[PRD] {exc}", file=sys.stderr)
        sys.exit(1)

    print(output)


if __name__ == "__main__":
    main()
