NO_RESULT = -1
"""Sentinel count for update/delete outcomes that produced no count."""

DEFAULT_MAX_RESULTS = 1000
"""Hard cap on documents returned by a listing."""

ID_FIELD = "id"
"""Filter key that selects documents by identity."""
