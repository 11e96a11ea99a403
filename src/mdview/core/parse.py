"""Source decoding, file discovery, and markdown-it parsing into a Document tree"""

from pathlib import Path

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.tasklists import tasklists_plugin

from mdview.core.models import Document
from mdview.errors import InvalidSourceError


MD_EXTENSIONS = {'.md', '.mdx'}


def make_parser(preset: str = 'gfm-like', task_lists: bool = True) -> MarkdownIt:
    """Build a MarkdownIt instance with raw HTML passthrough and GFM autolinks."""
    md = MarkdownIt(preset, options_update={"html": True, "linkify": True})
    if preset != 'gfm-like':
        md.enable(['table', 'strikethrough', 'linkify'], ignoreInvalid=True)
    if task_lists:
        md.use(tasklists_plugin)
    return md


def decode_source(source: str | bytes) -> str:
    """Return source as text, rejecting anything that is not valid UTF-8."""
    if isinstance(source, bytes):
        try:
            return source.decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidSourceError(f"Source is not valid UTF-8: {e}") from e
    try:
        source.encode('utf-8')
    except UnicodeEncodeError as e:
        raise InvalidSourceError(f"Source is not valid UTF-8: {e}") from e
    return source


def parse(source: str, preset: str = 'gfm-like', task_lists: bool = True) -> Document:
    """Parse markdown text into a Document; ambiguous syntax degrades to literal text."""
    md = make_parser(preset, task_lists)
    env: dict = {}
    tokens = md.parse(source, env)
    return Document(root=SyntaxTreeNode(tokens), options=md.options, env=env)


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS)
