"""Intermediate data models passed between pipeline stages"""

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from markdown_it.tree import SyntaxTreeNode
from markdown_it.utils import OptionsDict


@dataclass
class Document:
    """Parsed markdown: a node tree plus what the serializer needs to emit it."""
    root:    SyntaxTreeNode
    options: OptionsDict            # parser options (html, breaks, langPrefix, ...)
    env:     dict[str, Any] = field(default_factory=dict)   # reference definitions etc.

    def walk(self) -> Iterator[SyntaxTreeNode]:
        """Yield every node below the root in document order."""
        for child in self.root.children:
            yield from child.walk()

    def count(self, node_type: str) -> int:
        return sum(1 for n in self.walk() if n.type == node_type)


@dataclass(frozen=True)
class CodeBlockSpan:
    """One `<pre><code>...</code></pre>` substring of rendered HTML."""
    start:        int
    end:          int
    language:     Optional[str]     # None when the block had no language class
    escaped_code: str               # entity-escaped text between the code tags


@dataclass(frozen=True)
class HighlightedBlock:
    """Light and dark renderings of one code block."""
    language: str                   # alias of the lexer actually used ('text' on fallback)
    light:    str
    dark:     str

    @property
    def html(self) -> str:
        return (
            f'<div class="code-block" data-language="{self.language}">'
            f'{self.light}{self.dark}</div>'
        )
