"""
Predefined geographic clusters.

Responsibilities:
- Hold an immutable registry of named sub-regions with style profiles.
- Score how well each cluster matches a free-text travel style.
- Split a collection budget into per-cluster quotas.
- Pick places per cluster according to those quotas.
- Reorder a ranked shortlist so style-matching clusters get their share.
"""
