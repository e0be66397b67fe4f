"""
Reference data and history sources.

- teams / stadiums: static lookup tables
- sources: abstract collaborator interfaces (games, injuries, news, weather)
- repository: in-memory and DataFrame-backed implementations
- loaders: nflreadpy schedule loader (imported explicitly, requires network)
"""
