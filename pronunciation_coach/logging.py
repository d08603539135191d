"""
Logging for the ``pronunciation_coach`` logger tree.

Modules log through children of the package logger (``.app``, ``.host``,
``.capabilities``, ``.practice``, ``.scorer``). Handlers are attached to the
package logger only, and children inherit them; ``components`` adjusts the
level of individual children, e.g. ``{"scorer": "DEBUG"}`` to trace every
accuracy computation.
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Union

PACKAGE_LOGGER = "pronunciation_coach"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

Level = Union[int, str]


def _resolve_level(level: Level) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_coach_logging(
    level: Level = logging.INFO,
    *,
    log_dir: Optional[str] = None,
    components: Optional[Mapping[str, Level]] = None,
) -> logging.Logger:
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(_resolve_level(level))
    package_logger.propagate = False
    formatter = logging.Formatter(LOG_FORMAT)

    # FileHandler subclasses StreamHandler
    if not any(type(h) is logging.StreamHandler for h in package_logger.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        package_logger.addHandler(stream_handler)

    resolved_log_dir = log_dir or os.getenv("PRONUNCIATION_COACH_LOG_DIR")
    if resolved_log_dir:
        log_path = os.path.abspath(Path(resolved_log_dir) / f"{PACKAGE_LOGGER}.log")
        if not any(
            isinstance(h, logging.FileHandler) and h.baseFilename == log_path for h in package_logger.handlers
        ):
            Path(log_path).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)

    for component, component_level in (components or {}).items():
        logging.getLogger(f"{PACKAGE_LOGGER}.{component}").setLevel(_resolve_level(component_level))

    return package_logger
