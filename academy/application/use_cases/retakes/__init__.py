from academy.application.use_cases.retakes.lifecycle import (
    Actor,
    assign_retakes,
    change_retake_management_status,
    change_retake_status,
    complete_retake,
    delete_retake,
    edit_retake_date,
    list_retake_history,
    mark_retake_absent,
    postpone_retake,
    update_retake_note,
)
from academy.application.use_cases.retakes.undo_history import undo_retake_history

__all__ = [
    "Actor",
    "assign_retakes",
    "postpone_retake",
    "mark_retake_absent",
    "complete_retake",
    "edit_retake_date",
    "change_retake_status",
    "change_retake_management_status",
    "update_retake_note",
    "delete_retake",
    "list_retake_history",
    "undo_retake_history",
]
