from .management_status_service import ManagementStatusService
from .notice_service import send_retake_notice

__all__ = ["ManagementStatusService", "send_retake_notice"]
