import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from cashier.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(funcName)s: %(message)s"

_configured = False


def configure_logging(settings: Settings) -> None:
    """Attach console and rotating file handlers to the ``cashier`` logger once."""
    global _configured
    if _configured:
        return
    logger = logging.getLogger("cashier")
    logger.setLevel(settings.log_level.upper())

    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    if settings.log_dir:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_dir / "cashier.log", maxBytes=2_000_000, backupCount=5)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _configured = True
