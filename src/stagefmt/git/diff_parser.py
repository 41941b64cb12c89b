"""Parser for ``git diff-index`` raw output.

One record per line::

    :100644 100644 <src sha> <dst sha> M<TAB>path/to/file
    :100644 100644 <src sha> <dst sha> R086<TAB>old name<TAB>new name

The leading colon is optional and a single space is accepted in place of
the tab before the first path. Path fields run to the end of the line, so
paths containing spaces survive intact. Paths git had to C-quote (quotes,
backslashes, control characters) are unquoted.
"""

from __future__ import annotations

import re
from typing import Iterator

from stagefmt.git.models import DiffRecord, DiffStatus
from stagefmt.git.quoting import unquote_path

_RECORD_RE = re.compile(
    r"^:?(\d{6}) (\d{6}) ([0-9a-f]{40}) ([0-9a-f]{40}) "
    r"([ACDMRTUXB])(\d{0,3})"
    r"[\t ](.+?)(?:\t(.+))?$"
)


class ParseError(Exception):
    """Raised when a diff-index line does not have the expected shape."""


def parse_diff_line(line: str) -> DiffRecord:
    """Parse a single raw record. Raises ParseError on mismatch."""
    m = _RECORD_RE.match(line.rstrip("\r\n"))
    if m is None:
        raise ParseError(f"Unrecognised diff-index line: {line!r}")

    score = m.group(6)
    return DiffRecord(
        src_mode=m.group(1),
        dst_mode=m.group(2),
        src_hash=m.group(3),
        dst_hash=m.group(4),
        status=DiffStatus(m.group(5)),
        score=int(score) if score else None,
        src_path=unquote_path(m.group(7)),
        dst_path=unquote_path(m.group(8) or ""),
    )


def parse_diff_index(output: str) -> Iterator[DiffRecord]:
    """Yield a DiffRecord for every non-empty line of *output*."""
    # Records end in LF only; str.splitlines would also break on U+2028 and
    # friends, which may appear unescaped in paths.
    for line in output.split("\n"):
        if not line.strip():
            continue
        yield parse_diff_line(line)
