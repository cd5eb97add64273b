"""Ledger extract ingestion.

This module reads raw extracts and resolves their heterogeneous headers
into canonical fields ready for unification.
"""
