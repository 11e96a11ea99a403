"""Slugs for rendered output file names"""

import re


def slugify(text: str) -> str:
    """Lowercase text; drop punctuation and turn whitespace, '_' and '.' into single hyphens."""
    text = re.sub(r'[^\w\s.-]', '', text.lower())
    text = re.sub(r'[\s_.]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')
