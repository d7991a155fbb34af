"""Infrastructure interface exports."""

from .provider_client import JobProviderClient, ProviderClient
from .request_audit_store import RequestAuditStore
from .token_verifier import TokenVerifier

__all__ = ["JobProviderClient", "ProviderClient", "RequestAuditStore", "TokenVerifier"]
