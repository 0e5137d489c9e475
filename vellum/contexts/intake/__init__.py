"""
Intake Context

Responsibilities:
- Tracks job applications on a status board (Wishlist through Rejected)
- Keeps a dense per-column ordering after every change
- Persists the board to a local JSON key/value file

Owns: Job records, board ordering, job storage
Never: Generates or edits resume content
"""

from vellum.contexts.intake.job_board import (
    COLUMNS,
    STORAGE_KEY,
    Job,
    JobBoard,
    JobStatus,
    JsonStorage,
    Priority,
    normalize_orders,
    seed_jobs,
)

__all__ = [
    "JobStatus",
    "Priority",
    "COLUMNS",
    "Job",
    "JobBoard",
    "JsonStorage",
    "STORAGE_KEY",
    "normalize_orders",
    "seed_jobs",
]
