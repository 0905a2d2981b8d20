"""Domain modules for sync business rules.

- diff: Descriptor comparison and operation ordering

Architecture:
    domain/ contains pure business logic without filesystem access.
    Applying operations stays in executor.py.
"""

from datasync.sync.domain.diff import diff, plan, sort_operations

__all__ = [
    "diff",
    "plan",
    "sort_operations",
]
