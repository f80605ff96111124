"""Core engine layer for MemVCS.

This module provides the in-memory version control model: object records,
commits, branches, the repository and the uniform operation result.
"""

from memvcs.core.branch import Branch
from memvcs.core.history import History
from memvcs.core.models import Commit, ObjectRecord
from memvcs.core.repository import BranchManager, Repository
from memvcs.core.result import OperationResult, Receiver

__all__ = [
    "Branch",
    "BranchManager",
    "Commit",
    "History",
    "ObjectRecord",
    "OperationResult",
    "Receiver",
    "Repository",
]
