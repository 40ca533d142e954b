"""
Candidate reconciliation and preference ranking.

Responsibilities:
- Define the canonical Place record shared by every provider collector.
- Collapse duplicate candidates from independent providers into merged records.
- Filter candidates against user preferences (budget, style, categories, dates).
- Score, sort and cap the shortlist by trip length.
- Suggest visit windows for a place within a day's time block.
"""
