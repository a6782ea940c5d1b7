"""Command line interface for financeflow."""
