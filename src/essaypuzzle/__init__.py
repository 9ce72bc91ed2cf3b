"""Essay Puzzle: arrange essay blocks on a timeline and get LLM feedback on their balance."""

__version__ = "0.1.0"
