"""FastAPI application factory for the transcription proxy."""

from fastapi import FastAPI

from playscribe.proxy.handlers import AnonymizingProxy
from playscribe.proxy.routes import transcription_router


def create_app(proxy: AnonymizingProxy, lifespan=None) -> FastAPI:
    """Builds the API around an already composed proxy."""
    app = FastAPI(title="Playscribe Transcription Proxy", lifespan=lifespan)
    app.state.proxy = proxy
    app.include_router(transcription_router)
    return app
