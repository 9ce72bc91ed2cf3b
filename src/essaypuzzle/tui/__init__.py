"""Textual user interface for Essay Puzzle."""
