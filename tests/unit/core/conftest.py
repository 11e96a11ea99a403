"""Shared fixtures for core unit tests"""

import pytest

from mdview.core.highlight import Highlighter


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold**, *em* and `code` text.

## Heading 2

- item one
- item two

```python
print("hello")
```

> quoted

<div class="note">raw</div>

---

Footer paragraph.
"""


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="highlighter")
def highlighter_fixture():
    return Highlighter()
