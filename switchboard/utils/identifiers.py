"""ID generation utilities."""

import uuid


def generate_thread_id() -> str:
    """Generate a conversation thread ID (UUID4)."""
    return str(uuid.uuid4())


def generate_run_id() -> str:
    """Generate a unique run ID (UUID4)."""
    return str(uuid.uuid4())


def generate_message_id() -> str:
    """Generate a message ID (16-char hex string)."""
    return uuid.uuid4().hex[:16]
