"""Core (UI-agnostic) ESG casualty-risk dashboard logic.

This package contains:
- CSV parsing and record normalization (upload text -> typed records)
- region-centroid geo resolution for the map
- derived view compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
