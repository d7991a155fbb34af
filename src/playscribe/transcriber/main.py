"""
Recording Transcriber Service.

Entry point for the recording transcription worker.
"""

from ddtrace import patch_all

from playscribe.common import setup_logging
from playscribe.transcriber.dependencies import get_worker

logger = setup_logging()
patch_all()


def main():
    """Starts the worker."""
    logger.info("Starting recording transcriber service")
    worker = get_worker()
    worker.start()


if __name__ == "__main__":
    main()
