"""FastAPI application entry point."""

from ddtrace import patch_all

from playscribe.proxy.app import create_app
from playscribe.proxy.dependencies import get_proxy, lifespan

patch_all()

app = create_app(get_proxy(), lifespan=lifespan)
