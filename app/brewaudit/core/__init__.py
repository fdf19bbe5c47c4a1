"""Reconciliation engine: parsing, classification, gap analysis, review and mutation."""
