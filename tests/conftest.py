"""Root test configuration: a small on-disk article corpus shared across suites"""

from pathlib import Path

import pytest


NULLABILITY_MD = """\
---
title: Nullability Annotations in Java
date: 2024-07-25
categories: [java, nullability]
author: Jane Doe
---

Pick one annotation set and stick with it.

```java
@NullMarked
package com.example;
```

Then annotate the exceptions to the rule.
"""

PROBLEM_DETAILS_MD = """\
---
title: Problem Details with Sealed Classes
date: 2024-09-02
categories:
  - java
  - spring
---

Spring 6 ships with **RFC 9457** support.

```java
sealed interface Failure permits NotFound, Conflict {}
```
"""

ERROR_HANDLING_MD = """\
---
title: Error Handling Basics
date: 2024-09-02
categories: spring
---

A short overview.
"""

BROKEN_MD = """\
---
title: Missing its date
---

Body.
"""


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path) -> Path:
    """Directory of three valid articles (one nested) written to tmp_path/content."""
    root = tmp_path / "content"
    (root / "2024").mkdir(parents=True)
    (root / "2024-07-25-nullability.md").write_text(NULLABILITY_MD, encoding="utf-8")
    (root / "2024" / "problem-details.md").write_text(PROBLEM_DETAILS_MD, encoding="utf-8")
    (root / "error-handling.mdx").write_text(ERROR_HANDLING_MD, encoding="utf-8")
    (root / "notes.txt").write_text("not an article", encoding="utf-8")
    return root


@pytest.fixture(name="broken_dir")
def broken_dir_fixture(content_dir) -> Path:
    """content_dir plus one article whose front-matter lacks a date."""
    (content_dir / "broken.md").write_text(BROKEN_MD, encoding="utf-8")
    return content_dir
