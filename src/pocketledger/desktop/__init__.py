"""Flet desktop shell for the ledger."""
