"""
Output Normalizer
Cleans the raw model response into CSV body rows.
"""
import csv
import re
from typing import List, Tuple

from .models import CSV_HEADER

FENCE_MARKER = "```"
HEADER_PREFIX = CSV_HEADER.split(",")[0] + ","
EXPECTED_COLUMN_COUNT = len(CSV_HEADER.split(","))


def clean_model_output(raw: str) -> str:
    """
    Strip code fences and a repeated header line from model output.

    Models sometimes wrap CSV in ```csv fences or echo the header even when
    told not to; both are removed. Remaining lines are trimmed and blank
    lines dropped. Column counts are not enforced here.
    """
    content = (raw or "").strip()
    if content.startswith(FENCE_MARKER):
        content = "\n".join(
            line for line in content.split("\n")
            if not line.strip().startswith(FENCE_MARKER)
        ).strip()

    lines = [line.strip() for line in content.split("\n")]
    lines = [line for line in lines if line]

    if lines and re.sub(r'\s', '', lines[0]).startswith(HEADER_PREFIX):
        lines.pop(0)

    return "\n".join(lines)


def find_malformed_rows(csv_body: str) -> List[Tuple[int, int]]:
    """
    Report rows whose column count differs from the header.

    Returns (line number, column count) pairs, 1-based. Quoted cells with
    commas are handled by the csv module.
    """
    if not csv_body:
        return []
    malformed = []
    for line_number, row in enumerate(csv.reader(csv_body.splitlines()), start=1):
        if len(row) != EXPECTED_COLUMN_COUNT:
            malformed.append((line_number, len(row)))
    return malformed
