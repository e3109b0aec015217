"""Utility helpers for pdftextx."""
from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Union

PathLike = Union[str, os.PathLike]


def configure_logging(verbose: bool = False) -> None:
    """Configure package-wide logging."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def to_path(path: PathLike) -> Path:
    """Normalize an input path to :class:`Path`."""
    return Path(path).expanduser().resolve()


def ensure_output_directory(path: Path) -> None:
    """Ensure the parent directory of ``path`` exists."""
    path.parent.mkdir(parents=True, exist_ok=True)


@dataclass
class Elapsed:
    """Wall-clock duration filled in when a :func:`time_block` exits."""

    seconds: float = 0.0


@contextmanager
def time_block(logger: logging.Logger, message: str) -> Iterator[Elapsed]:
    """Context manager that logs the execution time of a code block."""
    elapsed = Elapsed()
    start = time.perf_counter()
    logger.debug("Starting %s", message)
    try:
        yield elapsed
    finally:
        elapsed.seconds = time.perf_counter() - start
        logger.info("%s completed in %.2fs", message, elapsed.seconds)
