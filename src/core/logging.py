"""Configuración de logging.

Los módulos usan `logging.getLogger(__name__)`; la CLI llama a
`setup_logging` una sola vez con el nivel de `AppSettings.log_level`.
La salida va a stderr vía Rich para no mezclarse con tablas/JSON en stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGERS = ("core", "adapters", "cli")


def resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.strip().upper(), logging.WARNING)


def setup_logging(level: str | int = "WARNING", *, console: Console | None = None) -> None:
    """Instala un `RichHandler` en los loggers del proyecto.

    Idempotente: una segunda llamada solo ajusta el nivel.
    """

    resolved = resolve_level(level)
    for name in ROOT_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(resolved)
        if not any(isinstance(h, RichHandler) for h in logger.handlers):
            handler = RichHandler(
                console=console or Console(stderr=True),
                show_path=False,
                rich_tracebacks=False,
            )
            handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
            logger.addHandler(handler)
