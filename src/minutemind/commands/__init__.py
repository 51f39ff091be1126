"""Typer command modules for the MinuteMind CLI."""
