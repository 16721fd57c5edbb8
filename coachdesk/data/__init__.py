"""
Data access layer.

Design rules:
- Views call ONLY the DataContext (service.py), reports.py and settings_store.py.
- Every backend call goes through the DataContext so it can run against the
  built-in sample data when the REST API is unreachable.
- No env var reads here (config-only).
"""
