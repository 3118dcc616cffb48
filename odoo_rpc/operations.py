"""
Logical operations and the request envelope

The positional argument order of every operation is the same for both wire
protocols; only the envelope around it differs. This module owns that order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Tuple


class Operation(str, Enum):
    """Model methods the record-set client can call"""
    CREATE = "create"
    WRITE = "write"
    SEARCH = "search"
    SEARCH_READ = "search_read"
    READ = "read"
    UNLINK = "unlink"


# Number of operation-specific arguments each operation takes, in order:
#   create: values | write: ids, values | search: domain
#   search_read: domain, fields | read: ids, fields | unlink: ids
OPERATION_ARITY = {
    Operation.CREATE: 1,
    Operation.WRITE: 2,
    Operation.SEARCH: 1,
    Operation.SEARCH_READ: 2,
    Operation.READ: 2,
    Operation.UNLINK: 1,
}


@dataclass(frozen=True)
class RpcRequest:
    """One encoded call, ready for a transport adapter"""
    endpoint: str
    service: str
    method: str
    args: Tuple[Any, ...]


def authenticate_args(db: str, username: str, password: str) -> List[Any]:
    return [db, username, password]


def execute_args(
    db: str,
    uid: int,
    password: str,
    model: str,
    operation: Operation,
    op_args: Tuple[Any, ...],
) -> Tuple[List[Any], List[Any]]:
    """Build the fixed-order arguments of a model call

    Returns:
        Tuple: (call prefix ``[db, uid, password, model, operation]``, operation arguments)

    Raises:
        ValueError: Wrong number of operation arguments
    """
    operation = Operation(operation)
    expected = OPERATION_ARITY[operation]
    if len(op_args) != expected:
        raise ValueError(
            f"{operation.value} takes {expected} argument(s), got {len(op_args)}"
        )
    return [db, uid, password, model, operation.value], list(op_args)
