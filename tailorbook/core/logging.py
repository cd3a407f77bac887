import logging

from tailorbook.core.config import Settings


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Quiet noisy libraries
    logging.getLogger("passlib").setLevel(logging.ERROR)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    if settings.uses_default_secret:
        logging.getLogger("tailorbook").warning(
            "SECRET_KEY is not set. Using the default value is not secure. "
            "Update your environment configuration."
        )
