"""Utility functions for switchboard."""

from switchboard.utils.identifiers import (
    generate_thread_id,
    generate_run_id,
    generate_message_id,
)

__all__ = [
    "generate_thread_id",
    "generate_run_id",
    "generate_message_id",
]
