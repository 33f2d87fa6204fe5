import logging

from ledger.app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None):
    logging.basicConfig(level=level or settings.log_level, format=LOG_FORMAT)
