"""Document-to-HTML serialization via the markdown-it HTML renderer"""

from markdown_it.renderer import RendererHTML

from mdview.core.models import Document


def serialize(doc: Document) -> str:
    """Emit HTML for doc.

    Text and code content are entity-escaped; html_block/html_inline nodes are
    written verbatim. Raw HTML is not sanitized: only render sources from
    trusted authors.
    """
    tokens = doc.root.to_tokens()
    return RendererHTML().render(tokens, doc.options, doc.env)
