"""Read back a DI module file this tool generated earlier.

Only the container shape emitted by the skeletons in
``wiring_generator.scaffolding.templates`` is understood; anything else raises.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from .declaration_synthesizer import normalize_signature
from .errors import MalformedExistingArtifactError
from .models import ParsedArtifact, Style

_IMPORT_KEYWORD = "import "
_PACKAGE_LINE = re.compile(r"^[ \t]*package[ \t]", re.MULTILINE)
_LEADING_BLANK_LINES = re.compile(r"\A(?:[ \t]*\n)+")
_HEADER_ANCHOR = re.compile(r"^[ \t]*(?:package|import)[ \t][^\n]*(?:\n|\Z)", re.MULTILINE)

_CONTAINER_MARKERS: dict[Style, re.Pattern[str]] = {
    Style.ANNOTATION_BINDING: re.compile(r"\babstract[ \t]+class[ \t]+\w+[^{\n]*\{"),
    Style.DSL_REGISTRATION: re.compile(r"\bmodule[ \t]*\{"),
}

_CONTAINER_DESCRIPTIONS: dict[Style, str] = {
    Style.ANNOTATION_BINDING: "'abstract class <Name> {' container",
    Style.DSL_REGISTRATION: "'module {' container",
}


def extract_imports(text: str) -> frozenset[str]:
    """Collect every trimmed line that starts with the import keyword."""
    return frozenset(
        line.strip()
        for line in text.splitlines()
        if line.strip().startswith(_IMPORT_KEYWORD)
    )


def _matching_brace(text: str, open_idx: int) -> int:
    """Index of the brace closing the one at open_idx, or -1 if unbalanced."""
    depth = 0
    for idx in range(open_idx, len(text)):
        char = text[idx]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return idx
    return -1


def container_span(
    text: str,
    style: Style,
    path: Path | None = None,
) -> tuple[int, int, int]:
    """Locate the header start and the container braces in a module file.

    The header starts right after the last package/import line preceding the
    container marker.

    Returns:
        (header_start, open_idx, close_idx) offsets into text.

    Raises:
        MalformedExistingArtifactError: If the container marker is missing or
            its braces do not balance.
    """
    marker = _CONTAINER_MARKERS[style].search(text)
    if marker is None:
        raise MalformedExistingArtifactError(
            f"missing {_CONTAINER_DESCRIPTIONS[style]}",
            path,
        )

    open_idx = marker.end() - 1
    close_idx = _matching_brace(text, open_idx)
    if close_idx < 0:
        raise MalformedExistingArtifactError(
            f"unbalanced braces after {_CONTAINER_DESCRIPTIONS[style]}",
            path,
        )

    header_start = 0
    for anchor in _HEADER_ANCHOR.finditer(text, 0, marker.start()):
        header_start = anchor.end()
    return header_start, open_idx, close_idx


def parse(
    text: str | None,
    style: Style,
    path: Path | None = None,
) -> ParsedArtifact:
    """Split an existing module file into imports, body and preserved text.

    Args:
        text: File content, or None when the file does not exist.
        style: Declaration style the file was generated with.
        path: File location, only used in error messages.

    Returns:
        ParsedArtifact describing the file.

    Raises:
        MalformedExistingArtifactError: If the container marker is missing or
            its braces do not balance.
    """
    if text is None:
        return ParsedArtifact.empty()
    if not text.strip():
        return ParsedArtifact(source_text=text)

    package_match = _PACKAGE_LINE.search(text)
    preamble = text[: package_match.start()] if package_match else ""

    header_start, open_idx, close_idx = container_span(text, style, path)
    body = _LEADING_BLANK_LINES.sub("", text[open_idx + 1 : close_idx]).rstrip()

    return ParsedArtifact(
        imports=extract_imports(text[:header_start]),
        declaration_body=body,
        preamble=preamble,
        header=text[header_start : open_idx + 1],
        trailer=text[close_idx + 1 :],
        source_text=text,
    )


def _declared_text(body: str) -> str:
    return normalize_signature(
        "\n".join(
            line for line in body.splitlines() if not line.strip().startswith("//")
        )
    )


def extract_signatures(body: str, candidates: Iterable[str]) -> set[str]:
    """Candidate signatures already textually present in a declaration body.

    The body is whitespace-normalized and full-line comments are ignored, so a
    declaration still counts when it shares a line with its annotation or
    carries a trailing comment. Matches must not run into a neighbouring
    identifier.
    """
    text = _declared_text(body)
    found: set[str] = set()
    for signature in candidates:
        key = normalize_signature(signature)
        if key and re.search(rf"(?<![\w.]){re.escape(key)}(?!\w)", text):
            found.add(key)
    return found
