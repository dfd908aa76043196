"""
Identifier parsing for Linear issues.

Users paste ticket numbers, Linear URLs or raw issue ids, often several at
once. Everything is reduced to an ordered, duplicate-free list of canonical
identifiers (``ENG-123``) or opaque ids that are passed through as typed.
"""
import re
from typing import List, Optional, Sequence, Tuple, Union

TOKEN_SEPARATOR_PATTERN = re.compile(r'[\s,;]+')
# Not preceded by a letter or digit so that "abc1ENG-2" does not yield a partial key
IDENTIFIER_PATTERN = re.compile(r'(?<![A-Za-z0-9])([A-Za-z]+)-(\d+)(?!\d)')
EXACT_IDENTIFIER_PATTERN = re.compile(r'^([A-Za-z]+)-(\d+)$')
UUID_PATTERN = re.compile(
    r'^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$'
)


def _canonical(team_key: str, number: str) -> str:
    return f"{team_key.upper()}-{number}"


def normalize_issue_input(value: str) -> str:
    """
    Normalize a single user supplied value.

    Returns the first ``TEAM-NUMBER`` found anywhere in the value with the
    team key uppercased, otherwise the trimmed value itself.
    """
    trimmed = value.strip()
    if UUID_PATTERN.match(trimmed):
        return trimmed

    match = IDENTIFIER_PATTERN.search(trimmed)
    if match:
        return _canonical(match.group(1), match.group(2))
    return trimmed


def parse_issue_inputs(value: Optional[Union[str, Sequence[str]]]) -> List[str]:
    """
    Parse one or more raw input fields into canonical identifiers.

    Each field may hold several identifiers separated by whitespace, commas
    or semicolons. Tokens without a recognizable identifier are kept so the
    lookup can fail on them explicitly instead of dropping them silently.
    """
    if value is None:
        return []
    values = [value] if isinstance(value, str) else list(value)

    results: List[str] = []
    seen = set()

    def add(candidate: str):
        normalized = normalize_issue_input(candidate)
        if normalized and normalized not in seen:
            seen.add(normalized)
            results.append(normalized)

    for raw in values:
        if not raw or not isinstance(raw, str):
            continue
        for token in TOKEN_SEPARATOR_PATTERN.split(raw):
            token = token.strip()
            if not token:
                continue
            if UUID_PATTERN.match(token):
                add(token)
                continue
            matches = IDENTIFIER_PATTERN.findall(token)
            if matches:
                for team_key, number in matches:
                    add(_canonical(team_key, number))
                continue
            add(token)

    return results


def split_identifier(identifier: str) -> Optional[Tuple[str, int]]:
    """Split an exact ``TEAM-NUMBER`` identifier into (team key, number)"""
    match = EXACT_IDENTIFIER_PATTERN.match(identifier.strip())
    if not match:
        return None
    return match.group(1).upper(), int(match.group(2))
