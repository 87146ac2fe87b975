"""Submission validation package."""

from worktrack.validation.validator import SubmissionValidator, clean_entries

__all__ = ["SubmissionValidator", "clean_entries"]
