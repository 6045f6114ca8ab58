import logging
from typing import Iterable, Union


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    loggers: Iterable[str] = ("merkle_cli", "merkle_sdk"),
) -> None:
    lvl = _coerce_level(level)
    logging.basicConfig(
        level=lvl, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    for name in loggers:
        logging.getLogger(name).setLevel(lvl)
