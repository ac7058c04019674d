"""Shared fixtures for core unit tests"""

import pytest

from mdvet.core.parse import load_text


SAMPLE_MD = """\
---
section: guides
layout: page
title: Maps
redirect_from: /maps.html
order: 3
---
Maps are key-value stores.

```python
squares = {n: n * n for n in range(3)}
```

Nested access:

```json
{"a": {"b": 1}}
```

```elixir
%{a: 1}
```

Done.
"""

BROKEN_MD = """\
```python
def f(:
    pass
```

```yaml
key: [unclosed
```

```python
print("still checked")
```
"""


@pytest.fixture(name="sample_doc")
def sample_doc_fixture():
    return load_text(SAMPLE_MD, "guides/maps.md")


@pytest.fixture(name="broken_doc")
def broken_doc_fixture():
    return load_text(BROKEN_MD, "broken.md")
