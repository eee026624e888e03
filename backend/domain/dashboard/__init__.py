"""
Dashboard Domain - Values derived from the project list.

Pure functions only:
- Due-date arithmetic, urgency bands and display labels
- Progress percentages and dashboard counters
- Calendar, monthly progress and yearly timeline aggregations
- List filtering and free-text search
"""
