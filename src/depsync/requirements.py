"""Requirements-file text processing.

Post-processes resolver exports (editable self-install stripping), extracts
package names, and implements the syntactic fallback validator used when a
dry-run install is not possible.
"""

import re

from .models import VERSION_OPERATORS, InvalidLine

# "-e .", "-e ./", "--editable .", "-e file:.", "-e file:./" with optional trailing
# comment. Anything else after -e (a path, a VCS URL) is a real dependency.
_EDITABLE_SELF_RE = re.compile(
    r"^(?:-e|--editable)(?:\s+|=)(?:file:)?\.(?:/)?(?:\s+#.*)?$"
)

# Loose name match only. PEP 508 naming rules are not enforced here.
_NAME_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9._-]*(?:\[[A-Za-z0-9._,\s-]*\])?$")

_VERSION_RE = re.compile(r"^[A-Za-z0-9.*+!_-]+$")

# Longest operators first so ">=" is not read as ">"
_OPERATORS = sorted(VERSION_OPERATORS, key=len, reverse=True)

# Any of the recognized operators: "==" or a bare "<" or ">" (covers "<=" and ">=")
_RECOGNIZED_OP_RE = re.compile(r"==|[<>]")


def is_editable_self(line: str) -> bool:
    """True for a line that installs the project itself from its directory."""
    return bool(_EDITABLE_SELF_RE.match(line.strip()))


def strip_editable_self(text: str) -> str:
    """Remove editable self-install lines from exported requirements text.

    Whole lines are dropped (not blanked) so regenerating from the same
    export is byte-for-byte stable.
    """
    kept = [line for line in text.splitlines() if not is_editable_self(line)]
    if not kept:
        return ""
    return "\n".join(kept) + "\n"


def logical_lines(text: str) -> list[tuple[int, str]]:
    """Join backslash continuations, returning (first_lineno, content) pairs."""
    lines: list[tuple[int, str]] = []
    buffer = ""
    start = 0
    for lineno, raw in enumerate(text.splitlines(), start=1):
        if not buffer:
            start = lineno
        stripped = raw.rstrip()
        if stripped.endswith("\\"):
            buffer += stripped[:-1] + " "
            continue
        buffer += stripped
        lines.append((start, buffer.strip()))
        buffer = ""
    if buffer:
        lines.append((start, buffer.strip()))
    return lines


def _strip_options(line: str) -> str:
    """Drop trailing per-requirement options (--hash=...) and inline comments."""
    if " #" in line:
        line = line.split(" #", 1)[0]
    kept = []
    for token in line.split(" "):
        if token.startswith("--"):
            break
        kept.append(token)
    return " ".join(kept).strip()


def requirement_body(line: str) -> str | None:
    """Return the requirement part of a logical line, or None for non-requirements.

    Comments, blank lines, and pip option lines (-r, -c, --index-url, -e ...)
    are not requirements.
    """
    line = line.strip()
    if not line or line.startswith("#") or line.startswith("-"):
        return None
    return _strip_options(line)


def _check_specifier(spec: str) -> str | None:
    """Validate "op version[, op version...]". Returns a reason or None."""
    for clause in spec.split(","):
        clause = clause.strip()
        op = next((o for o in _OPERATORS if clause.startswith(o)), None)
        if op is None:
            return f"unrecognized version operator in '{clause}'"
        version = clause[len(op):].strip()
        if not version or not _VERSION_RE.match(version):
            return f"malformed version in '{clause}'"
    return None


def check_line(body: str) -> str | None:
    """Validate one requirement. Returns a failure reason, or None if valid."""
    requirement, sep, marker = body.partition(";")
    if sep:
        marker = marker.strip()
        if not marker:
            return "empty environment marker"
        if ";" in marker:
            return "multiple ';' separators"

    requirement = requirement.strip()
    if not requirement:
        return "missing package name"

    # No recognized operator: bare names, direct references, local paths and
    # other specifiers (~=, !=) are accepted as-is.
    if not _RECOGNIZED_OP_RE.search(requirement):
        return None

    # Direct reference: name @ url
    if " @ " in requirement:
        name, _, url = requirement.partition(" @ ")
        if not _NAME_RE.match(name.strip()) or not url.strip():
            return "malformed direct reference"
        return None

    match = re.search(r"[=<>!~]", requirement)
    name = requirement[: match.start()].strip()
    if not name or not _NAME_RE.match(name):
        return "malformed package name"
    return _check_specifier(requirement[match.start():])


def validate_requirements_text(text: str) -> list[InvalidLine]:
    """Syntactic validation of a requirements file.

    Every non-comment, non-blank line must be either a bare package name or
    a name with one of the recognized version operators.
    """
    invalid: list[InvalidLine] = []
    for lineno, line in logical_lines(text):
        body = requirement_body(line)
        if body is None:
            continue
        reason = check_line(body)
        if reason is not None:
            invalid.append(InvalidLine(lineno=lineno, text=line, reason=reason))
    return invalid


def normalize_name(name: str) -> str:
    """PEP 503 normalized project name."""
    return re.sub(r"[-_.]+", "-", name).lower()


def package_names(text: str) -> list[str]:
    """Normalized package names declared in a requirements text, in file order."""
    names: list[str] = []
    for _, line in logical_lines(text):
        body = requirement_body(line)
        if body is None:
            continue
        requirement = body.partition(";")[0]
        requirement = requirement.partition(" @ ")[0]
        name = re.split(r"[\[=<>!~\s]", requirement.strip(), maxsplit=1)[0]
        if name:
            names.append(normalize_name(name))
    return names


def count_requirements(text: str) -> int:
    return len(package_names(text))
