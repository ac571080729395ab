"""Preserve response bodies on ogen's unexpected status errors.

`validate.UnexpectedStatusCodeError` keeps the `*http.Response`, but the decoder's
caller closes `resp.Body` via defer before anyone can read it. Every

    return res, validate.UnexpectedStatusCodeWithResponse(resp)

gets the body drained and rewrapped first, at the same indentation:

    // Buffer the response body so it survives resp.Body.Close()
    body, _ := io.ReadAll(resp.Body)
    resp.Body = io.NopCloser(bytes.NewReader(body))
    return res, validate.UnexpectedStatusCodeWithResponse(resp)

and `"bytes"` / `"io"` are added to the import block when missing.
"""

import logging
import re
from collections.abc import Iterable

from jinja2 import StrictUndefined, Template

from ogenfix.patchers.base import SpliceRule, splice

logger = logging.getLogger("ogenfix.patchers.error_body")

REQUIRED_IMPORTS = ("bytes", "io")

# Rendered in front of the `return`, after the indentation captured from the match.
BUFFER_BODY_TEMPLATE = Template(
    "// Buffer the response body so it survives resp.Body.Close()\n"
    "{{ indent }}body, _ := io.ReadAll(resp.Body)\n"
    "{{ indent }}resp.Body = io.NopCloser(bytes.NewReader(body))\n"
    "{{ indent }}",
    undefined=StrictUndefined,
)

UNEXPECTED_STATUS_RETURN_PATTERN = re.compile(
    rb"^(?P<indent>[ \t]*)(?P<anchor>return res, validate\.UnexpectedStatusCodeWithResponse\(resp\))",
    re.MULTILINE,
)

IMPORT_BLOCK_PATTERN = re.compile(rb"(?P<open>import \(\n)(?P<body>.*?)(?P<close>\n\))", re.DOTALL)


def _render_buffer_body(match: re.Match[bytes]) -> bytes:
    indent = match.group("indent").decode("ascii")
    return BUFFER_BODY_TEMPLATE.render(indent=indent).encode("utf-8")


UNEXPECTED_STATUS_RULE = SpliceRule(
    name="fixerror",
    pattern=UNEXPECTED_STATUS_RETURN_PATTERN,
    anchor="anchor",
    render=_render_buffer_body,
)


def ensure_imports(content: bytes, names: Iterable[str] = REQUIRED_IMPORTS) -> bytes:
    """Add each of `names` to the first `import (...)` block unless it is already quoted there.

    New lines go right after `import (`; the rest of the block is kept as is.
    Files without an import block are returned unchanged.
    """
    names = list(names)
    block = IMPORT_BLOCK_PATTERN.search(content)
    if block is None:
        logger.debug("No import block found, not adding %s", names)
        return content
    existing = block.group("body")
    additions = [b'\t"%s"' % name.encode("ascii") for name in names if b'"%s"' % name.encode("ascii") not in existing]
    if not additions:
        return content
    insert_at = block.end("open")
    return content[:insert_at] + b"\n".join(additions) + b"\n" + content[insert_at:]


def fix_unexpected_status_code_body(content: bytes) -> tuple[bytes, int]:
    """Buffer the response body before every `UnexpectedStatusCodeWithResponse` return.

    Returns the new buffer and the number of returns changed. Imports are only
    touched when at least one return was rewritten.
    """
    fixed, count = splice(content, UNEXPECTED_STATUS_RULE)
    if count > 0:
        fixed = ensure_imports(fixed)
    return fixed, count
