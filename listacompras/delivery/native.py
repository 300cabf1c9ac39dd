"""Native delivery: write to a cache file and open the platform share action."""

from __future__ import annotations

import asyncio
import os
import shutil
import subprocess
import sys
from pathlib import Path

from ..models import ExportWriteError, ShareError
from . import FileDelivery


def _default_share_command() -> list[str]:
    if sys.platform == "darwin":
        return ["open"]
    return ["xdg-open"]


class NativeShareDelivery(FileDelivery):
    """Write the spreadsheet to a cache directory and open it with the OS.

    Args:
        cache_dir: Directory for the temporary spreadsheet file.
        share_command: Command that receives the file path as its last
            argument. Defaults to the platform opener.
    """

    def __init__(
        self,
        cache_dir: str | Path,
        share_command: list[str] | None = None,
    ) -> None:
        self._cache_dir = Path(cache_dir).expanduser()
        self._share_command = share_command

    def _write_file(self, data: bytes, filename: str) -> Path:
        path = self._cache_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    async def write(self, data: bytes, filename: str) -> str:
        try:
            path = await asyncio.to_thread(self._write_file, data, filename)
        except OSError as e:
            raise ExportWriteError(f"Erro ao escrever arquivo: {e}") from e
        return str(path)

    def _open(self, handle: str) -> None:
        if self._share_command is None and sys.platform == "win32":
            try:
                os.startfile(handle)  # type: ignore[attr-defined]
            except OSError as e:
                raise ShareError(f"Erro ao compartilhar arquivo: {e}") from e
            return

        cmd = list(self._share_command or _default_share_command())
        if shutil.which(cmd[0]) is None:
            raise ShareError(
                f"Comando {cmd[0]} não encontrado. "
                "Configure [delivery] share_command no arquivo de configuração."
            )
        cmd.append(handle)

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=30,
            )
        except subprocess.TimeoutExpired:
            raise ShareError("O compartilhamento excedeu o tempo limite.")
        except OSError as e:
            raise ShareError(f"Erro ao compartilhar arquivo: {e}") from e
        if result.returncode != 0:
            raise ShareError(
                f"Erro ao compartilhar arquivo: {result.stderr.strip()}"
            )

    async def share(self, handle: str) -> None:
        await asyncio.to_thread(self._open, handle)
