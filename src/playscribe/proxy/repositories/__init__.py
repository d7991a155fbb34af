from .request_audit_repository import SQLRequestAuditStore

__all__ = ["SQLRequestAuditStore"]
