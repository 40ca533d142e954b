"""
POI shortlist engine.

Turns raw point-of-interest candidates collected from map, tour-board and
search providers into a deduplicated, preference-ranked shortlist, and splits
a collection budget across predefined geographic clusters.
"""
