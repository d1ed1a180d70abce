"""Test setup for mdchapter."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


CHAPTER_TEXT = """Preamble line before any heading.

# Chapter 11. Strong Coupling and Related Problems

To demonstrate the problems of strong coupling, let us imagine that we decided to add *payment* support.

## Contexts

NB: we do not discuss the partner API here.

```json
// Request
POST /v1/orders
{
  "coffee_machine_id",
  "recipe": "lungo"
}
```

### The Layout

> Low-level entities must not define
> high-level ones.

**Note**: the `recipe` field is optional[^1].

## Extensibility

Some text with <tags> & ampersands.

```
plain body
```
"""


@pytest.fixture
def chapter_text() -> str:
    """A small chapter exercising every block kind."""
    return CHAPTER_TEXT
