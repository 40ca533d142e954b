"""
Provider export ingestion.

Responsibilities:
- Read CSV exports from map / tour-board / search collectors.
- Map provider-specific columns into the canonical Place schema.
- Hand the resulting candidates to the deduplication pass.
"""
