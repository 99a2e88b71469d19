"""Typer command functions."""
