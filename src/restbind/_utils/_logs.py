import logging
import sys

from .constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


def setup_logging(should_debug: bool = False) -> None:
    """Attach a stream handler to the ``restbind`` logger.

    Calling it again only adjusts the level.
    """
    logger.setLevel(logging.DEBUG if should_debug else logging.INFO)

    if any(getattr(h, "_restbind_handler", False) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(name)s %(levelname)s: %(message)s")
    )
    handler._restbind_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
