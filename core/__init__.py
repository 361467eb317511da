"""Core (UI-agnostic) dashboard logic.

This package contains:
- the static program / SKU / build / game catalog
- selection state and its reducer-style transitions
- synthetic trend, benchmark and telemetry generators
- page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
