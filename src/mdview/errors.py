"""Exceptions raised by the rendering pipeline"""


class RenderError(Exception):
    """Base class for failures that stop a document from rendering."""


class InvalidSourceError(RenderError, ValueError):
    """Source text is not valid UTF-8; raised before parsing begins."""


class HighlighterUnavailableError(RenderError, RuntimeError):
    """The highlighting backend could not be used (e.g. a theme failed to load).

    Unrelated to the document content: an unknown code language is never an
    error and falls back to plain text instead.
    """
