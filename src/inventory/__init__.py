"""Inventory business logic: records, pricing, catalog, alerts and reports.

Everything in this package is free of Streamlit and LLM side-effects so it can
be called from the UI layer or from scripts and tests.
"""
