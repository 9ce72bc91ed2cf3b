"""Identifier generation for essay blocks."""

import uuid


def generate_block_id() -> str:
    """
    Generate a random UUID v4 for a new essay block.

    Block ids are opaque to every consumer; only equality matters.

    Returns:
        UUID string in standard format (e.g., "f47ac10b-58cc-4372-a567-0e02b2c3d479")
    """
    return str(uuid.uuid4())
