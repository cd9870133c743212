from pathlib import Path

from fine_appeal.exceptions import ConfigurationError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "templates"


def load_prompt_template(name: str, path: Path | None = None) -> str:
    """Load a prompt template from a file.

    Args:
        name: File name inside the bundled templates directory.
        path: Explicit path overriding the bundled template.

    Returns:
        The raw template string with placeholders.

    Raises:
        ConfigurationError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(path: Path | None = None) -> str:
    """Load the fine record JSON schema from a file.

    Args:
        path: Path to the JSON schema file.
              Defaults to the bundled fine_record_schema.json.

    Returns:
        The raw JSON schema string.

    Raises:
        ConfigurationError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "fine_record_schema.json"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Failed to load JSON schema: {exc}") from exc
