"""Descriptor diffing.

Compares two snapshot descriptors and produces the change operations
that turn the old snapshot into the new one. Pure functions only: no
filesystem access happens here.

Rules for each path:
| old            | new            | Operation            |
|----------------|----------------|----------------------|
| absent         | file           | Create               |
| absent         | dir marker     | (none)               |
| file / dir     | other file     | Modify               |
| file           | dir marker     | (none)               |
| file           | absent         | Remove               |
| dir marker     | absent         | RemoveDir            |
| equal hash     | equal hash     | (none)               |

Equal whole-snapshot hashes short-circuit to no operation at all.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from datasync.sync.descriptor import is_directory_marker
from datasync.sync.types import ChangeOperation, Create, Modify, Remove, RemoveDir

if TYPE_CHECKING:
    from datasync.sync.descriptor import Descriptor


def diff(old: Descriptor, new: Descriptor) -> list[ChangeOperation]:
    """Compute the change operations from ``old`` to ``new``.

    The whole-snapshot hash is trusted over the entries: when it matches,
    nothing is reported even if the entries differ.

    Args:
        old: Descriptor of the current destination state.
        new: Descriptor of the reference snapshot.

    Returns:
        Unsorted operations (see sort_operations).
    """
    if old.whole_hash == new.whole_hash:
        return []

    operations: list[ChangeOperation] = []
    for path, new_hash in new.entries.items():
        if path not in old.entries:
            if not is_directory_marker(new_hash):
                operations.append(Create(path, new_hash))
        elif old.entries[path] != new_hash:
            # A file turning into a directory marker is left alone
            if not is_directory_marker(new_hash):
                operations.append(Modify(path, old.entries[path], new_hash))

    for path, old_hash in old.entries.items():
        if path in new.entries:
            continue
        if is_directory_marker(old_hash):
            operations.append(RemoveDir(path))
        else:
            operations.append(Remove(path, old_hash))

    return operations


def sort_operations(operations: Iterable[ChangeOperation]) -> list[ChangeOperation]:
    """Order operations for execution.

    Lower priority first; ties keep their original order.
    """
    return sorted(operations, key=lambda op: op.priority)


def plan(old: Descriptor, new: Descriptor) -> list[ChangeOperation]:
    """Compute the operations to apply, in execution order."""
    return sort_operations(diff(old, new))
