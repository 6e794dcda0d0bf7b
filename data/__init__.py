"""Demo data helpers for Ledgerline."""
