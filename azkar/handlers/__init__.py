"""
Command handlers
Each @api_handler function is one command of the store contract. The registry
is dispatched in-process by InProcessBridge and mounted as POST routes on the
dev server.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Type, TypeVar

from pydantic import BaseModel

from azkar.core.logger import get_logger

if TYPE_CHECKING:
    from fastapi import FastAPI

F = TypeVar("F", bound=Callable[..., Any])

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommandHandler:
    """Registry entry: the command name is the function name"""

    name: str
    func: Callable[..., Any]
    body: Optional[Type[BaseModel]]
    module: str
    summary: str


_handler_registry: Dict[str, CommandHandler] = {}


def api_handler(body: Optional[Type[BaseModel]] = None):
    """
    Register a command handler

    @param body - Request model validated from the command arguments; handlers
        without one take no arguments
    """

    def decorator(func: F) -> F:
        doc = func.__doc__ or ""
        _handler_registry[func.__name__] = CommandHandler(
            name=func.__name__,
            func=func,
            body=body,
            module=func.__module__.split(".")[-1],
            summary=doc.split("\n")[0] or func.__name__,
        )
        return func

    return decorator


def get_registered_handlers() -> Dict[str, CommandHandler]:
    """Copy of the command registry"""
    return _handler_registry.copy()


def register_fastapi_routes(app: "FastAPI", prefix: str = "/api") -> None:
    """Mount every command as ``POST {prefix}/{command}``"""
    for handler in _handler_registry.values():
        app.post(
            f"{prefix}/{handler.name}",
            tags=[handler.module],
            summary=handler.summary,
            response_model=None,
        )(handler.func)
        logger.debug(f"✓ Registered route: POST {prefix}/{handler.name}")

    logger.info(f"Command routes registered: {len(_handler_registry)}")


# Import handler modules to trigger decorator registration
# ruff: noqa: E402
from . import phrases, system

__all__ = [
    "CommandHandler",
    "api_handler",
    "register_fastapi_routes",
    "get_registered_handlers",
    "phrases",
    "system",
]
