"""Transcription proxy endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from playscribe.common import (
    AuthenticationError,
    PayloadValidationError,
    Provider,
    ProviderError,
    ProviderNetworkError,
    ProviderNotConfiguredError,
    setup_logging,
)
from playscribe.proxy.exceptions import AuditPersistenceError, UnsupportedOperationError
from playscribe.proxy.handlers import AnonymizingProxy
from playscribe.proxy.request_models import TranscriptionRequest
from playscribe.proxy.response_models import HealthResponse, JobSubmittedResponse

logger = setup_logging()

router = APIRouter(prefix="/api/transcription", tags=["transcription"])

_bearer = HTTPBearer(auto_error=False)

_STATUS_BY_ERROR = {
    PayloadValidationError: 400,
    AuthenticationError: 401,
    UnsupportedOperationError: 409,
    ProviderError: 502,
    ProviderNotConfiguredError: 503,
    ProviderNetworkError: 504,
}
_PROXY_ERRORS = tuple(_STATUS_BY_ERROR)


def get_proxy(request: Request) -> AnonymizingProxy:
    """Returns the proxy the application was built with."""
    return request.app.state.proxy


def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> str:
    return credentials.credentials if credentials else ""


ProxyDep = Annotated[AnonymizingProxy, Depends(get_proxy)]
TokenDep = Annotated[str, Depends(get_bearer_token)]


def _http_error(error: Exception) -> HTTPException:
    """Translates a typed proxy failure into its HTTP status and error body."""
    status_code = next(
        code for cls, code in _STATUS_BY_ERROR.items() if isinstance(error, cls)
    )
    kind = getattr(error, "kind", None)
    detail = {
        "error": str(error),
        "kind": kind.value if kind else type(error).__name__,
    }
    if isinstance(error, ProviderError):
        detail["upstream_status"] = error.status_code

    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return HTTPException(status_code=status_code, detail=detail, headers=headers)


@router.get("/health", response_model=HealthResponse)
def health(proxy: ProxyDep) -> HealthResponse:
    """Reports which providers are configured. Advisory only."""
    capabilities = proxy.capabilities()
    available = [provider.value for provider, ok in capabilities.items() if ok]
    return HealthResponse(
        status="ok" if available else "unavailable",
        services={provider.value: ok for provider, ok in capabilities.items()},
        available=available,
    )


@router.post("/{provider}")
async def transcribe(
    provider: Provider,
    body: TranscriptionRequest,
    proxy: ProxyDep,
    token: TokenDep,
) -> dict:
    """
    Forwards a recording to one provider under an anonymized request id.

    Single-call providers answer with their raw JSON. Job-based providers
    answer with the job id to poll.
    """
    try:
        payload = body.to_payload()
        if proxy.is_job_provider(provider):
            job = await proxy.submit_job(token, provider, payload)
            return JobSubmittedResponse(
                transcription_id=job.job_id, request_id=job.request_id
            ).model_dump(by_alias=True)
        return await proxy.forward(token, provider, payload)
    except _PROXY_ERRORS as e:
        raise _http_error(e) from e
    except AuditPersistenceError as e:
        logger.error("Request record could not be stored", extra={"provider": provider.value})
        raise HTTPException(status_code=500, detail="Internal server error") from e


@router.get("/{provider}/jobs/{job_id}")
async def job_status(
    provider: Provider,
    job_id: str,
    proxy: ProxyDep,
    token: TokenDep,
) -> dict:
    """Returns the raw status document of a submitted job."""
    try:
        return await proxy.poll_job(token, provider, job_id)
    except _PROXY_ERRORS as e:
        raise _http_error(e) from e
