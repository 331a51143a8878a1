import logging
import sys
from pathlib import Path
from typing import Optional, Union


def setup_logging(level: int = logging.INFO, log_file: Optional[Union[str, Path]] = None):
    """
    Configures the root logger for command line runs.
    - Console output to stdout.
    - Optional log file (overwritten on each run).
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.insert(0, logging.FileHandler(path, mode="w", encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s:%(lineno)d | %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,  # drops handlers left from a previous call
    )

    logging.getLogger("isle_engine").setLevel(level)
    logging.getLogger("numba").setLevel(logging.WARNING)
