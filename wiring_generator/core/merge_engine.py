"""Merge desired bindings into an existing (or new) DI module.

Merging is additive and idempotent:

- imports are unioned and re-sorted, minus the ones the skeleton already has
- bindings whose signature is already in the body are left alone
- the existing body is kept verbatim; new declarations are appended after it
- text before the package line survives, as do the header between the imports
  and the container brace and everything after the closing brace

Running the same merge twice yields ``MergeStatus.UNCHANGED`` and identical text.
"""

from __future__ import annotations

from collections.abc import Iterable

from wiring_generator.scaffolding.templates import (
    BINDINGS_PLACEHOLDER,
    IMPORTS_PLACEHOLDER,
    PACKAGE_PLACEHOLDER,
    skeleton_intrinsic_imports,
)

from .artifact_parser import container_span, extract_signatures
from .declaration_synthesizer import normalize_signature, render, separator_for
from .models import Binding, MergeResult, MergeStatus, ParsedArtifact, Style


def import_line(qualified_name: str, package_name: str) -> str | None:
    """Import line for a qualified name, or None if no import is needed.

    Unqualified names and names living in the module's own package need none.
    """
    if "." not in qualified_name:
        return None
    owner = qualified_name.rsplit(".", 1)[0]
    if owner == package_name:
        return None
    return f"import {qualified_name}"


def required_imports(
    existing: ParsedArtifact,
    desired: Iterable[Binding],
    package_name: str,
    skeleton: str,
) -> set[str]:
    """Existing plus desired imports, minus those the skeleton provides."""
    imports = set(existing.imports)
    for binding in desired:
        for path in binding.import_paths:
            line = import_line(path, package_name)
            if line is not None:
                imports.add(line)
    return imports - skeleton_intrinsic_imports(skeleton)


def new_bindings(
    existing_body: str,
    desired: Iterable[Binding],
) -> list[Binding]:
    """Desired bindings not yet declared, first occurrence of each signature kept."""
    desired = list(desired)
    seen = extract_signatures(existing_body, [binding.signature for binding in desired])
    fresh: list[Binding] = []
    for binding in desired:
        key = normalize_signature(binding.signature)
        if key in seen:
            continue
        seen.add(key)
        fresh.append(binding)
    return fresh


def merge_body(existing_body: str, additions: list[Binding], style: Style) -> str:
    """Append rendered additions to the existing body using the style separator."""
    kept = existing_body.rstrip()
    rendered = render(additions, style)
    if not kept.strip():
        return rendered
    if not rendered:
        return kept
    return kept + separator_for(style) + rendered


def fill_skeleton(skeleton: str, package_name: str, imports: Iterable[str], body: str) -> str:
    """Substitute the package, import and binding placeholders."""
    imports_block = "\n".join(sorted(imports))
    text = skeleton.replace(PACKAGE_PLACEHOLDER, package_name)
    if imports_block:
        text = text.replace(IMPORTS_PLACEHOLDER, imports_block)
    else:
        text = text.replace(IMPORTS_PLACEHOLDER + "\n", "").replace(IMPORTS_PLACEHOLDER, "")
    return text.replace(BINDINGS_PLACEHOLDER, body)


def _attach_surroundings(text: str, existing: ParsedArtifact, style: Style) -> str:
    """Put the preamble, header and trailer of a parsed file back around text."""
    if existing.header is None:
        return existing.preamble + text

    header_start, open_idx, close_idx = container_span(text, style)
    return (
        existing.preamble
        + text[:header_start]
        + existing.header
        + text[open_idx + 1 : close_idx + 1]
        + existing.trailer
    )


def merge(
    existing: ParsedArtifact | None,
    desired: list[Binding],
    style: Style,
    package_name: str,
    skeleton: str,
) -> MergeResult:
    """Compute the merged module text and its status.

    Args:
        existing: Parsed current file, or None when there is no file.
        desired: Bindings that must be present after the merge, in render order.
        style: Declaration style of this artifact.
        package_name: Package of the generated module.
        skeleton: Template with package/import/binding placeholders.

    Returns:
        MergeResult without an output path (the writer sets it).
    """
    current = existing if existing is not None else ParsedArtifact.empty()

    imports = required_imports(current, desired, package_name, skeleton)
    additions = new_bindings(current.declaration_body, desired)
    body = merge_body(current.declaration_body, additions, style)

    final_text = _attach_surroundings(
        fill_skeleton(skeleton, package_name, imports, body),
        current,
        style,
    )

    if not current.exists:
        status = MergeStatus.CREATED
    elif final_text != current.source_text:
        status = MergeStatus.UPDATED
    else:
        status = MergeStatus.UNCHANGED

    return MergeResult(status=status, output_path=None, final_text=final_text)
