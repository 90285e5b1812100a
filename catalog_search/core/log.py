import logging
from typing import IO

from catalog_search.core.config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(settings: Settings, stream: IO[str] | None = None) -> None:
    """Root logging setup shared by the CLI and the HTTP service."""
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format=LOG_FORMAT,
        stream=stream,
    )
    # Transport libraries are chatty at INFO (one line per request).
    logging.getLogger("elastic_transport").setLevel(logging.WARNING)
