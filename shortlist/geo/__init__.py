"""
Geo and string primitives.

Responsibilities:
- Great-circle distances between coordinates (scalar and vectorized).
- Route length, travel-time and walkability helpers.
- Levenshtein edit distance and address normalization for record linkage.
"""
