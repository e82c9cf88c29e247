"""Submitter - JSON-patch creation and update of work items."""

from adosync.submitter.exceptions import NoChangesError, SubmitterError
from adosync.submitter.patch import (
    PatchDocument,
    PatchOp,
    PatchOperation,
    build_create_patch,
    build_update_patch,
)
from adosync.submitter.submitter import Submitter

__all__ = [
    "NoChangesError",
    "PatchDocument",
    "PatchOp",
    "PatchOperation",
    "Submitter",
    "SubmitterError",
    "build_create_patch",
    "build_update_patch",
]
