"""Browser delivery: open the spreadsheet as a downloadable data URL."""

from __future__ import annotations

import asyncio
import base64
import webbrowser

from ..exporter import XLSX_MIME_TYPE
from ..models import ShareError
from . import FileDelivery


class BrowserDelivery(FileDelivery):
    """Hand the file to the browser in a new tab, without touching disk."""

    def __init__(self, mime_type: str = XLSX_MIME_TYPE) -> None:
        self._mime_type = mime_type

    async def write(self, data: bytes, filename: str) -> str:
        payload = base64.b64encode(data).decode("ascii")
        return f"data:{self._mime_type};base64,{payload}"

    async def share(self, handle: str) -> None:
        try:
            opened = await asyncio.to_thread(webbrowser.open_new_tab, handle)
        except webbrowser.Error as e:
            raise ShareError(f"Não foi possível abrir o navegador: {e}") from e
        if not opened:
            raise ShareError("Nenhum navegador disponível para abrir a planilha.")
