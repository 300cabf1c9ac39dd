"""CLI entry point for the shopping list."""

from __future__ import annotations

import argparse
import asyncio
import cmd
import logging
import sys
from pathlib import Path

from . import messages
from .config import AppConfig, load_config
from .controller import ShoppingListController
from .delivery import create_delivery
from .exporter import SpreadsheetExporter, items_to_records


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="listacompras",
        description="Lista de Compras: adicione produtos, acompanhe o total e exporte para Excel",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Caminho do arquivo de configuração (TOML)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Mostrar mensagens de depuração"
    )

    sub = parser.add_subparsers(dest="command")

    # shell
    sub.add_parser("shell", help="Sessão interativa da lista de compras")

    # export
    export_parser = sub.add_parser("export", help="Exportar produtos para Excel")
    export_parser.add_argument(
        "--item",
        type=str,
        action="append",
        default=[],
        metavar="NOME;QTD;VALOR",
        help="Produto a incluir (pode repetir)",
    )
    target = export_parser.add_mutually_exclusive_group()
    target.add_argument(
        "--output", "-o", type=str, default=None, metavar="FILE",
        help="Salvar a planilha neste arquivo",
    )
    target.add_argument(
        "--share", action="store_true",
        help="Compartilhar usando a forma de entrega configurada",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    match args.command:
        case "shell":
            _cmd_shell(config)
        case "export":
            _cmd_export(config, args)


def split_fields(line: str) -> tuple[str | None, str | None, str | None]:
    """Split "NOME;QTD;VALOR" into its three fields.

    Missing or blank fields come back as None so the current form value is kept.
    """
    parts = [p.strip() for p in line.split(";")]
    parts += [""] * (3 - len(parts))
    name, quantity, price = (p or None for p in parts[:3])
    return name, quantity, price


def _fill_form(controller: ShoppingListController, line: str) -> None:
    name, quantity, price = split_fields(line)
    if name is not None:
        controller.set_name(name)
    if quantity is not None:
        controller.set_quantity(quantity)
    if price is not None:
        controller.set_price(price)


def _alert(message: str) -> None:
    print(message, file=sys.stderr)


class ShoppingListShell(cmd.Cmd):
    """Interactive shopping list session."""

    intro = f"{messages.TITLE}\nDigite 'ajuda' para ver os comandos."
    prompt = "compras> "

    def __init__(self, controller: ShoppingListController, **kwargs) -> None:
        super().__init__(**kwargs)
        self.controller = controller

    def _item_id(self, arg: str) -> str | None:
        try:
            index = int(arg) - 1
        except ValueError:
            _alert(f"Número de produto inválido: {arg!r}")
            return None
        if not 0 <= index < len(self.controller.items):
            _alert(f"Produto {arg} não existe.")
            return None
        return self.controller.items[index].id

    def emptyline(self) -> bool:
        return False

    def default(self, line: str) -> bool:
        _alert(f"Comando desconhecido: {line}")
        return False

    def do_ajuda(self, arg: str) -> None:
        """Mostrar os comandos disponíveis."""
        self.do_help(arg)

    def do_adicionar(self, arg: str) -> None:
        """adicionar NOME;QTD;VALOR: adiciona um produto (ou salva a edição)."""
        _fill_form(self.controller, arg)
        item = self.controller.submit()
        if item is not None:
            self.do_listar("")

    do_salvar = do_adicionar

    def do_editar(self, arg: str) -> None:
        """editar N: carrega o produto N no formulário."""
        item_id = self._item_id(arg.strip())
        if item_id is None:
            return
        self.controller.edit(item_id)
        form = self.controller.form
        print(f"{form.name};{form.quantity};{form.price}")
        print(f"Use 'salvar' para {messages.BUTTON_SAVE.lower()}.")

    def do_cancelar(self, arg: str) -> None:
        """cancelar: descarta a edição em andamento."""
        self.controller.cancel_edit()

    def do_excluir(self, arg: str) -> None:
        """excluir N: remove o produto N."""
        item_id = self._item_id(arg.strip())
        if item_id is None:
            return
        self.controller.delete(item_id)
        self.do_listar("")

    def do_listar(self, arg: str) -> None:
        """listar: mostra os produtos e o total."""
        lines = self.controller.item_lines()
        if not lines:
            print(messages.EMPTY_LIST)
        for i, line in enumerate(lines, 1):
            print(f"  {i:>2}. {line}")
        print(self.controller.total_display())

    def do_total(self, arg: str) -> None:
        """total: mostra o total."""
        print(self.controller.total_display())

    def do_exportar(self, arg: str) -> None:
        """exportar: exporta a lista para Excel e compartilha."""
        result = asyncio.run(self.controller.export())
        if result.ok:
            print(messages.EXPORT_SHARED.format(handle=result.handle[:80]))
        else:
            _alert(messages.EXPORT_FAILED)

    def do_sair(self, arg: str) -> bool:
        """sair: encerra a sessão."""
        return True

    do_EOF = do_sair


def _cmd_shell(config: AppConfig) -> None:
    controller = ShoppingListController.from_config(
        config,
        delivery=create_delivery(config),
        alert=_alert,
    )
    ShoppingListShell(controller).cmdloop()


def _cmd_export(config: AppConfig, args) -> None:
    if args.share:
        delivery = create_delivery(config)
    else:
        delivery = None

    # Invalid lines are reported below with the offending text
    controller = ShoppingListController.from_config(
        config, delivery=delivery, alert=lambda message: None
    )
    for line in args.item:
        _fill_form(controller, line)
        if controller.submit() is None:
            print(f"Produto inválido: {line}", file=sys.stderr)
            sys.exit(1)

    if args.share:
        result = asyncio.run(controller.export())
        if not result.ok:
            print(messages.EXPORT_FAILED, file=sys.stderr)
            sys.exit(1)
        print(messages.EXPORT_SHARED.format(handle=result.handle[:80]))
        return

    output = Path(args.output or config.export.filename)
    exporter = SpreadsheetExporter(sheet_name=config.export.sheet_name)
    exporter.save(items_to_records(controller.items), output)
    print(f"Planilha salva: {output}")
    print(controller.total_display())
