"""Shared fixtures for core unit tests"""

import pytest

from mdprep.config import Settings


SAMPLE_MD = """\
import { Callout } from '@/components/callout'

# Heading 1

A paragraph with **bold** text.

## Heading 2

- item one
- item two

```python
print("hello")
```

---

Footer paragraph.
"""


@pytest.fixture(name="settings")
def settings_fixture():
    return Settings()


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD
