"""Streamlit front end for Ledgerline."""

from .main import main

__all__ = ["main"]
