"""Minimal `key: value` frontmatter for agent documents.

Agent documents carry a flat header rather than full YAML, so values are kept as
plain strings and any typing is left to the caller.
"""

from __future__ import annotations

from collections.abc import Mapping

from loguru import logger

DELIMITER = "---"
BOM = "\ufeff"


def parse_frontmatter(text: str) -> tuple[dict[str, str], str]:
    """Split a markdown document into its header fields and body.

    Args:
        text: Raw document text

    Returns:
        Tuple of (fields, body). Without a header, fields are empty and the body is
        the input text. An unterminated header is reported and treated the same way.
        A leading byte order mark is dropped in every case.
    """
    text = text.removeprefix(BOM)
    lines = text.splitlines(keepends=True)
    if not lines or _strip_eol(lines[0]) != DELIMITER:
        return {}, text

    for closing, line in enumerate(lines[1:], start=1):
        if _strip_eol(line) == DELIMITER:
            break
    else:
        logger.warning("Frontmatter header is not closed with '---', ignoring it")
        return {}, text

    fields: dict[str, str] = {}
    for line in lines[1:closing]:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        key, sep, value = stripped.partition(":")
        if not sep:
            logger.debug("Skipping frontmatter line without a colon: {line}", line=stripped)
            continue
        fields[key.strip()] = value.strip()

    return fields, "".join(lines[closing + 1 :])


def render_frontmatter(fields: Mapping[str, str | None], body: str) -> str:
    """Build a document from header fields (in the given order) and a body.

    Fields whose value is None are left out.
    """
    header = [f"{key}: {value}" for key, value in fields.items() if value is not None]
    return f"{DELIMITER}\n" + "\n".join(header) + f"\n{DELIMITER}\n\n{body}"


def _strip_eol(line: str) -> str:
    return line.rstrip("\r\n")
