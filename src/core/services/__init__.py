"""Servicios puros del Core (sin I/O): builder de parámetros y dispatcher."""

from core.services.dispatcher import ResponseDispatcher
from core.services.parameters import RequestParameterBuilder, format_parameter

__all__ = [
    "RequestParameterBuilder",
    "ResponseDispatcher",
    "format_parameter",
]
