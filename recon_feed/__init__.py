"""Reconciliation event feed: turns relational source rows into reconciliation events."""
