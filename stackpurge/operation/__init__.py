"""Force deletion of DELETE_FAILED stack resources.

Classes:
    StackDeleter: Root stack orchestrator with preview and execute modes
    OperatorCollection: Classification of DELETE_FAILED resources across operators
    OperatorFactory: Operator construction with AWS capabilities
    OperatorManager: Ordered operator execution with failure aggregation
"""

from __future__ import annotations

from .collection import OperatorCollection
from .deleter import StackDeleter
from .factory import OperatorFactory
from .manager import OperatorManager

__all__ = [
    "OperatorCollection",
    "OperatorFactory",
    "OperatorManager",
    "StackDeleter",
]
