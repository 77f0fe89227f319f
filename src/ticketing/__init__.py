"""Ticketing: book seats on trains and vehicles, persisted to JSON files."""
