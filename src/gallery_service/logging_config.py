import logging
import sys

logger = logging.getLogger("gallery-service")


def setup_logging(level: str = "INFO"):
    """
    Configures the root logger for the service.
    Called by the application factory; replaces handlers left by an earlier call.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - [%(levelname)s] - %(message)s",
        stream=sys.stdout,
        force=True,
    )
    # Silence noisy libraries
    logging.getLogger("multipart").setLevel(logging.WARNING)
    logging.getLogger("python_multipart").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
