"""File delivery base class and factory.

A delivery takes the exported spreadsheet bytes, materializes them somewhere
(a data URL, a cache file) and hands the result to a share action.
"""

from __future__ import annotations

import logging
import os
import sys
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import AppConfig

logger = logging.getLogger(__name__)

ENV_VAR = "LISTACOMPRAS_ENV"


class FileDelivery(ABC):
    """Abstract base for handing an exported file to the user."""

    @abstractmethod
    async def write(self, data: bytes, filename: str) -> str:
        """Materialize the file and return a handle (path or URL).

        Raises:
            ExportWriteError: If the file cannot be written.
        """
        ...

    @abstractmethod
    async def share(self, handle: str) -> None:
        """Invoke the share/open action on a handle returned by write().

        Raises:
            ShareError: If the action fails.
        """
        ...

    async def deliver(self, data: bytes, filename: str) -> str:
        handle = await self.write(data, filename)
        await self.share(handle)
        return handle


def detect_environment() -> str:
    """Return "browser" or "native" for the running interpreter."""
    forced = os.environ.get(ENV_VAR, "").strip().lower()
    if forced in ("browser", "native"):
        return forced
    # Pyodide and other WebAssembly builds run inside a browser page
    if sys.platform == "emscripten":
        return "browser"
    return "native"


def create_delivery(config: AppConfig) -> FileDelivery:
    """Create a file delivery based on configuration."""
    backend_name = config.delivery.backend
    if backend_name == "auto":
        backend_name = detect_environment()
        logger.debug("Ambiente detectado: %s", backend_name)

    match backend_name:
        case "browser":
            from .browser import BrowserDelivery

            return BrowserDelivery()
        case "native":
            from .native import NativeShareDelivery

            return NativeShareDelivery(
                cache_dir=config.export.cache_dir,
                share_command=config.delivery.share_command or None,
            )
        case _:
            raise ValueError(
                f"Forma de entrega desconhecida: {backend_name!r}  "
                f"(escolha entre auto / browser / native)"
            )


__all__ = ["FileDelivery", "create_delivery", "detect_environment"]
