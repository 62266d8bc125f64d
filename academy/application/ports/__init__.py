from academy.application.ports.unit_of_work import UnitOfWork
from academy.application.ports.repositories import (
    ManagementStatusCatalog,
    RetakeAssignmentRepository,
    RetakeHistoryRepository,
)

__all__ = [
    "UnitOfWork",
    "ManagementStatusCatalog",
    "RetakeAssignmentRepository",
    "RetakeHistoryRepository",
]
