r"""Extract and decode the front-matter block at the head of a document.

The decoder understands a deliberately small subset of YAML: one ``key: value``
pair per line, dotted keys expanded into nested mappings, and a single level of
indented keys nested under the most recent top-level key. Anything deeper is
ignored rather than guessed at, and nothing here ever raises for malformed
input.

Example
-------
>>> from docs_content.frontmatter import parse_front_matter
>>> parsed = parse_front_matter("---\ntitle: Intro\ncount: 3\n---\nBody\n")
>>> parsed.metadata
{'title': 'Intro', 'count': 3}
>>> parsed.body
'Body\n'
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as typ

logger = logging.getLogger(__name__)

FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL
)
OPENING_DELIMITER_PATTERN = re.compile(r"\A---[ \t]*\r?\n")
LINE_SPLIT_PATTERN = re.compile(r"\r?\n")
INTEGER_PATTERN = re.compile(r"^-?[0-9]+$")
FLOAT_PATTERN = re.compile(r"^-?[0-9]*\.[0-9]+$")
BYTE_ORDER_MARK = "\ufeff"


@dc.dataclass(slots=True)
class FrontMatter:
    """Decoded metadata plus the document text that follows the block.

    Attributes
    ----------
    metadata : dict[str, Any]
        Nested key/value mapping decoded from the block; empty when the
        document has no front matter.
    body : str
        Remaining text after the closing delimiter, or the original text when
        no block was found.
    """

    metadata: dict[str, typ.Any]
    body: str


def parse_front_matter(text: str) -> FrontMatter:
    """Split ``text`` into front-matter metadata and body.

    Parameters
    ----------
    text : str
        Raw document contents. A block is recognised only when the text opens
        with a line consisting solely of ``---`` and a later line closes it the
        same way.

    Returns
    -------
    FrontMatter
        ``FrontMatter({}, text)`` when no complete block is present, otherwise
        the decoded metadata and the body after the block.
    """
    candidate = text[1:] if text.startswith(BYTE_ORDER_MARK) else text
    match = FRONT_MATTER_PATTERN.match(candidate)
    if not match:
        if OPENING_DELIMITER_PATTERN.match(candidate):
            logger.debug("Front matter opened without a closing delimiter; ignoring")
        return FrontMatter(metadata={}, body=text)
    metadata = decode_block(match.group(1))
    return FrontMatter(metadata=metadata, body=candidate[match.end() :])


def decode_block(block: str) -> dict[str, typ.Any]:
    """Decode the lines between the delimiters into a nested mapping.

    Indented lines attach to the most recent top-level key; only the first
    indentation depth seen under that key is honoured and deeper lines are
    skipped. Lines without a colon, blank lines, and ``#`` comments are
    ignored.
    """
    data: dict[str, typ.Any] = {}
    parent_key: str | None = None
    nested_indent: int | None = None

    for line in LINE_SPLIT_PATTERN.split(block):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        colon = line.find(":")
        if colon == -1:
            continue
        raw_key = line[:colon]
        key = raw_key.strip()
        if not key:
            continue
        value = coerce_scalar(line[colon + 1 :].strip())
        indent = len(raw_key) - len(raw_key.lstrip())

        if indent == 0:
            parent_key = None if "." in key else key
            nested_indent = None
            _assign(data, key, value)
            continue

        if parent_key is None:
            continue
        if nested_indent is None:
            nested_indent = indent
        elif indent != nested_indent:
            continue
        container = data.get(parent_key)
        if container == "":
            container = data[parent_key] = {}
        if isinstance(container, dict):
            _assign(container, key, value)

    return data


def _assign(target: dict[str, typ.Any], key: str, value: object) -> None:
    """Store ``value`` under ``key``, expanding dotted keys into nested dicts."""
    parts = [part.strip() for part in key.split(".")]
    if not all(parts):
        return
    current = target
    for part in parts[:-1]:
        existing = current.get(part)
        if existing is None or existing == "":
            existing = current[part] = {}
        if not isinstance(existing, dict):
            return
        current = existing
    current[parts[-1]] = value


def coerce_scalar(value: str) -> object:
    """Convert a front-matter value into a Python scalar.

    Precedence: ``true``/``false`` to bool, ``null`` to None, integers,
    floats, then single- or double-quoted strings lose their quotes. Anything
    else is returned verbatim (including the empty string).

    >>> coerce_scalar("3"), coerce_scalar("0.5"), coerce_scalar('"Jane Doe"')
    (3, 0.5, 'Jane Doe')
    """
    match value:
        case "":
            return ""
        case "true":
            return True
        case "false":
            return False
        case "null":
            return None
        case _ if INTEGER_PATTERN.match(value):
            return int(value)
        case _ if FLOAT_PATTERN.match(value):
            return float(value)
        case _ if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            return value[1:-1]
        case _:
            return value


__all__ = ["FrontMatter", "coerce_scalar", "decode_block", "parse_front_matter"]
