import logging
from support_intel.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def configure_logging(level: str = None) -> None:
    """
    Configure the root logger once for the service process.
    Falls back to INFO when LOG_LEVEL is not a known level name.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    logging.getLogger("support_intel").setLevel(numeric_level)
