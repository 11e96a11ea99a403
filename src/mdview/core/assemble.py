"""Splice highlighted blocks back into rendered HTML"""

from typing import Sequence

from mdview.core.models import CodeBlockSpan, HighlightedBlock


def assemble(rendered: str, pairs: Sequence[tuple[CodeBlockSpan, HighlightedBlock]]) -> str:
    """Replace each span of rendered with its highlighted block.

    Offsets refer to the original string, which is never mutated: the output
    is built once from the untouched gaps and the replacements. Pairs must be
    in document order and must not overlap.
    """
    parts = []
    cursor = 0
    for span, block in pairs:
        if span.start < cursor or span.end < span.start:
            raise ValueError(f"Code block span {span.start}:{span.end} overlaps or precedes offset {cursor}")
        parts.append(rendered[cursor:span.start])
        parts.append(block.html)
        cursor = span.end
    parts.append(rendered[cursor:])
    return "".join(parts)
