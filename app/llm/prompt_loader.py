from pathlib import Path

from app.llm.exceptions import LlmError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_system_prompt(path: Path | None = None) -> str:
    """Load the system prompt; it must contain ``{record_schema}``.

    Args:
        path: Path to the system prompt file.
              Defaults to the bundled system_prompt.txt.

    Raises:
        LlmError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "system_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LlmError(f"Failed to load system prompt: {exc}") from exc


def load_prompt_template(path: Path | None = None) -> str:
    """Load the user prompt template; it must contain ``{document_text}``.

    Raises:
        LlmError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "user_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LlmError(f"Failed to load prompt template: {exc}") from exc
