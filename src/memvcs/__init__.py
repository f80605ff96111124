"""MemVCS - an in-memory version control engine.

MemVCS tracks named objects in a staging area, freezes staged state into
immutable commits and organizes commits into branches that can be forked,
switched and inspected.
"""

from memvcs.constants import VERSION

__version__ = VERSION
__author__ = "MemVCS Contributors"

from memvcs.core import (
    Branch,
    BranchManager,
    Commit,
    ObjectRecord,
    OperationResult,
    Receiver,
    Repository,
)

__all__ = [
    "__version__",
    "__author__",
    "Branch",
    "BranchManager",
    "Commit",
    "ObjectRecord",
    "OperationResult",
    "Receiver",
    "Repository",
]
