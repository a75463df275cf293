import logging

from weather_records.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Configure root logging once for the application.

    The level defaults to `LOG_LEVEL` from the settings. Noisy third-party
    loggers (httpx request lines) are kept at WARNING unless DEBUG is asked for.
    """
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(level=level_name, format=LOG_FORMAT)
    logging.getLogger("weather_records").setLevel(level_name)

    if level_name != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)
