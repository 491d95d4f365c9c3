"""
Output Normalizer - Reshapes Taskwarrior report output for an AI reader.

Taskwarrior prints reports as aligned tables:

```
ID Age  Project Description        Urg
-- ---- ------- ------------------ ----
 1 2d   web     Fix the login bug   8.9
 2 5h   web     Write release notes 1.2

2 tasks
```

For list/next requests the normalizer keeps only the task rows:

```
Current tasks:
1 2d   web     Fix the login bug   8.9
2 5h   web     Write release notes 1.2
```

This is heuristic text reshaping, not a parser. Anything it does not
recognise is returned unchanged.
"""

import re
from typing import List, Union

from taskbridge.intent.schemas import IntentType

HEADER_LINE = re.compile(r"^\s*ID\s+")
TASK_ROW = re.compile(r"^\s*\d+\s+")
SUMMARY_LINE = re.compile(r"^\s*\d+\s+tasks?\s*$", re.IGNORECASE)

LISTING_INTENTS = {IntentType.LIST, IntentType.NEXT}


def normalize(raw_output: str, intent: Union[IntentType, str]) -> str:
    """
    Normalize Taskwarrior output for the given intent.

    Args:
        raw_output: stdout of the Taskwarrior run
        intent: Intent (or its string value) the command was built from

    Returns:
        "Current tasks:" block for list/next output with task rows,
        otherwise raw_output unchanged
    """
    try:
        intent = IntentType(intent)
    except ValueError:
        return raw_output

    if intent not in LISTING_INTENTS:
        return raw_output

    rows = extract_task_rows(raw_output)
    if rows:
        return "Current tasks:\n" + "\n".join(rows)
    return raw_output


def extract_task_rows(raw_output: str) -> List[str]:
    """Collect the task rows of the first report table in the output."""
    rows: List[str] = []
    in_listing = False

    for line in raw_output.splitlines():
        if not line.strip():
            continue

        if HEADER_LINE.match(line):
            in_listing = True
            continue

        if in_listing and SUMMARY_LINE.match(line):
            in_listing = False
            continue

        if in_listing and TASK_ROW.match(line):
            rows.append(line.strip())
            continue

        if not in_listing and "tasks" in line:
            break

    return rows
