import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once per process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # SQLAlchemy echoes every statement at INFO when its logger inherits our level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
