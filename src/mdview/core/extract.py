"""Code-block span extraction from serialized HTML"""

import html
import re

from mdview.core.models import CodeBlockSpan


# Non-greedy body: each block ends at its nearest </code></pre>.
CODE_BLOCK_RE = re.compile(
    r'<pre><code(?:\s+class="language-([^"\s]+)")?>(.*?)</code></pre>',
    re.DOTALL,
)


def extract(rendered: str) -> list[CodeBlockSpan]:
    """Return code-block spans of rendered in document order.

    Raw-HTML `<pre><code>` markup written by the author matches the same way as
    blocks generated from fences.
    """
    return [
        CodeBlockSpan(
            start=m.start(),
            end=m.end(),
            language=html.unescape(m.group(1)) if m.group(1) else None,
            escaped_code=m.group(2),
        )
        for m in CODE_BLOCK_RE.finditer(rendered)
    ]
