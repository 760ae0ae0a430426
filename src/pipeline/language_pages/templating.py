"""Templating utilities for language page generation.

Handles template file loading, placeholder extraction and context-driven
rendering. Nothing here knows about records; the page assembler builds the
context and this module only substitutes it.

Boundaries
----------
- Reads template files; never writes.
- Substitution is a single pass, so placeholder-like text inside inserted
  values (braces in code samples, for instance) is left untouched.

Examples
--------
>>> render_template("title {Title}\\n{Missing}", {"Title": "Python"})
'title Python\\n'
"""

import re
from pathlib import Path

from src.exceptions import ConfigurationError

PLACEHOLDER_PATTERN = re.compile(r"\{([a-zA-Z0-9_/]+)\}")
BLANK_LINE_RUN_PATTERN = re.compile(r"\n\n\n+")


def load_template(path: Path) -> str:
    """Read the contents of a template file as a string.

    Parameters
    ----------
    path : Path
        Path to the template file to be loaded.

    Returns
    -------
    str
        Contents of the template file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    with path.open("r", encoding="utf-8") as fh:
        return fh.read()


def extract_placeholders_from_template(content: str) -> list[str]:
    """Return a sorted list of unique placeholders found in the template.

    Placeholders are tokens of the form ``{Name}`` where the name can
    contain letters, digits, underscores or slashes.
    """
    return sorted(set(PLACEHOLDER_PATTERN.findall(content)))


def render_template(
    template_content: str, context: dict[str, str], missing: str = ""
) -> str:
    """Render the template by replacing placeholders using the provided context.

    Parameters
    ----------
    template_content : str
        The template text containing ``{Placeholders}``.
    context : dict[str, str]
        Mapping from placeholder names to their string values.
    missing : str, optional
        Replacement for placeholders absent from ``context``.

    Returns
    -------
    str
        The rendered template with placeholders substituted.
    """

    def replace_func(match: re.Match[str]) -> str:
        return context.get(match.group(1), missing)

    return PLACEHOLDER_PATTERN.sub(replace_func, template_content)


def collapse_blank_lines(text: str) -> str:
    """Collapse every run of three or more newlines to exactly two."""
    return BLANK_LINE_RUN_PATTERN.sub("\n\n", text)


def load_template_and_placeholders(path: Path) -> tuple[str, list[str]]:
    """Load a template and return its content along with found placeholders.

    Raises
    ------
    ConfigurationError
        If the template cannot be read or has no placeholders.
    """
    try:
        content = load_template(path)
    except OSError as exc:
        raise ConfigurationError(
            f"Cannot read page template: {exc}", context={"path": str(path)}
        ) from exc
    placeholders = extract_placeholders_from_template(content)
    if not placeholders:
        raise ConfigurationError(
            "No placeholders found in the template.", context={"path": str(path)}
        )
    return content, placeholders
