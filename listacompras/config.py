"""TOML configuration loader for the shopping list."""

from __future__ import annotations

import os
import sys
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]


def _default_cache_dir() -> str:
    return str(Path(tempfile.gettempdir()) / "listacompras")


@dataclass
class LocaleConfig:
    currency_symbol: str = "R$"
    decimal_separator: str = ","
    thousands_separator: str = "."


@dataclass
class ExportConfig:
    sheet_name: str = "Produtos"
    filename: str = "produtos.xlsx"
    cache_dir: str = field(default_factory=_default_cache_dir)


@dataclass
class DeliveryConfig:
    backend: str = "auto"
    share_command: list[str] = field(default_factory=list)


@dataclass
class AppConfig:
    locale: LocaleConfig = field(default_factory=LocaleConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    delivery: DeliveryConfig = field(default_factory=DeliveryConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    The cache directory can be overridden via LISTACOMPRAS_CACHE_DIR.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli é necessário no Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    loc = raw.get("locale", {})
    exp = raw.get("export", {})
    dlv = raw.get("delivery", {})

    # Resolve cache dir: environment variable → config file → default
    cache_dir = (
        os.environ.get("LISTACOMPRAS_CACHE_DIR", "")
        or exp.get("cache_dir", "")
        or _default_cache_dir()
    )

    # Accept "xdg-open" as well as ["xdg-open"]
    share_command = dlv.get("share_command", [])
    if isinstance(share_command, str):
        share_command = share_command.split()

    return AppConfig(
        locale=LocaleConfig(
            currency_symbol=loc.get("currency_symbol", "R$"),
            decimal_separator=loc.get("decimal_separator", ","),
            thousands_separator=loc.get("thousands_separator", "."),
        ),
        export=ExportConfig(
            sheet_name=exp.get("sheet_name", "Produtos"),
            filename=exp.get("filename", "produtos.xlsx"),
            cache_dir=cache_dir,
        ),
        delivery=DeliveryConfig(
            backend=dlv.get("backend", "auto"),
            share_command=list(share_command),
        ),
    )
