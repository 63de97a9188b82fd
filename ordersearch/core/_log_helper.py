import logging

logger = logging.getLogger("ordersearch")


def warn(message: str) -> None:
    logger.warning(message)


def configure(level: str | int | None = None) -> None:
    logging.basicConfig(
        level=level or logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
