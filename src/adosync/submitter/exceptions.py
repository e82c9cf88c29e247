"""Custom exceptions for the Submitter."""


class SubmitterError(Exception):
    """Base exception for Submitter errors."""


class NoChangesError(SubmitterError):
    """An update carried no field changes."""
