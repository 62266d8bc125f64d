from .exam import Exam

__all__ = ["Exam"]
