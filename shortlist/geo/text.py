from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")
_BRACKETS_RE = re.compile(r"[()\[\]]")

# Administrative-unit markers: Korean suffixes (서울특별시, 강남구), romanized
# suffixes (gangnam-gu, suwon-si) and standalone English unit words.
_ADMIN_UNIT_RE = re.compile(
    r"(?:특별자치시|특별자치도|특별시|광역시|시|군|구)(?=\s|,|$)"
    r"|-(?:si|gu|gun|dong)\b"
    r"|\b(?:special|metropolitan|city|district|ward|county)\b"
)


def normalize_text(value: str) -> str:
    """Lowercase, trim and collapse internal whitespace."""
    return _WHITESPACE_RE.sub(" ", value.lower()).strip()


def edit_distance(a: str, b: str) -> int:
    """
    Levenshtein distance between two strings.

    Comparison is case-insensitive and ignores leading/trailing whitespace.
    """
    s1 = a.lower().strip()
    s2 = b.lower().strip()
    len1, len2 = len(s1), len(s2)

    dp = [[0] * (len2 + 1) for _ in range(len1 + 1)]
    for i in range(len1 + 1):
        dp[i][0] = i
    for j in range(len2 + 1):
        dp[0][j] = j

    for i in range(1, len1 + 1):
        for j in range(1, len2 + 1):
            cost = 0 if s1[i - 1] == s2[j - 1] else 1
            dp[i][j] = min(
                dp[i - 1][j] + 1,  # deletion
                dp[i][j - 1] + 1,  # insertion
                dp[i - 1][j - 1] + cost,  # substitution
            )

    return dp[len1][len2]


def normalize_address(address: str | None) -> str:
    """Canonical form of an address for equality comparison."""
    if address is None:
        return ""
    value = _WHITESPACE_RE.sub(" ", address.lower())
    value = _BRACKETS_RE.sub("", value)
    value = _ADMIN_UNIT_RE.sub("", value)
    return _WHITESPACE_RE.sub(" ", value).strip()
