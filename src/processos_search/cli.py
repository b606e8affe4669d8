"""CLI interface for the processos search tool."""

from __future__ import annotations

import logging
from datetime import datetime

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .api import ProcessesApi
from .browser import ProcessesBrowser, SearchMode, filter_processes, paginate
from .client import ApiClient, ApiError
from .config import DEFAULT_LIMIT, PARTES_PER_PAGE, ConfigError
from .controllers import ProcessController, ProcessesController
from .models import Grau, Polo, Process, ProcessesListParams, ProcessListItem, SimplifiedParte
from .notify import ConsoleNotifier
from .process_number import apply_process_number_mask, is_complete_process_number, is_valid_process_number
from .theme import DARK, LIGHT, ThemeContext

console = Console()

GRAU_CHOICE = click.Choice([g.value for g in Grau], case_sensitive=False)

GRAU_LABELS = {
    Grau.PRIMEIRO: "Primeiro Grau",
    Grau.SEGUNDO: "Segundo Grau",
    Grau.SUPERIOR: "Superior",
}


def setup_logging(verbose: bool) -> None:
    logger = logging.getLogger("processos_search")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not logger.handlers:
        logger.addHandler(RichHandler(console=console, show_path=False))


def _api(ctx: click.Context) -> ProcessesApi:
    obj = ctx.ensure_object(dict)
    if "api" not in obj:
        try:
            client = ApiClient()
        except ConfigError as e:
            console.print(f"[red]Configuration error: {escape(str(e))}[/]")
            raise SystemExit(1)
        ctx.call_on_close(client.close)
        obj["api"] = ProcessesApi(client)
    return obj["api"]


def _format_date(value: str | None) -> str:
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%d/%m/%Y %H:%M")
    except ValueError:
        return value


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Legal process (processo) search tool."""
    setup_logging(verbose)
    theme = ThemeContext().open()
    ctx.ensure_object(dict)["theme"] = theme
    ctx.call_on_close(theme.close)
    console.push_theme(theme.theme)
    ctx.call_on_close(console.pop_theme)


def _render_list(items: list[ProcessListItem], title: str) -> None:
    if not items:
        console.print("[yellow]Nenhum processo encontrado.[/]")
        console.print("[processo.muted]Tente ajustar os filtros de busca.[/]")
        return

    table = Table(title=title, show_lines=True)
    table.add_column("#", style="processo.muted", width=3)
    table.add_column("Número", style="processo.numero", no_wrap=True)
    table.add_column("Tribunal", width=8)
    table.add_column("Grau", width=14)
    table.add_column("Classe")
    table.add_column("Assunto")
    table.add_column("Último movimento")

    for i, item in enumerate(items, 1):
        movimento = Text(_format_date(item.ultimo_movimento.data) + "\n", style="processo.muted")
        movimento.append(item.ultimo_movimento.descricao)
        table.add_row(
            str(i),
            escape(item.numero),
            escape(item.tribunal),
            GRAU_LABELS[item.grau],
            escape(item.classe_principal),
            escape(item.assunto_principal),
            movimento,
        )

    console.print(table)


@cli.command()
@click.option("-b", "--busca", default=None, help="Free-text query sent to the API.")
@click.option("-t", "--tribunal", default=None, help="Court code (e.g. TJMG).")
@click.option("-g", "--grau", type=GRAU_CHOICE, default=None, help="Instance level.")
@click.option("-n", "--limite", default=DEFAULT_LIMIT, show_default=True, help="Page size.")
@click.option("-p", "--paginas", default=1, show_default=True, help="Pages to load, following the cursor.")
@click.option("--palavra", default="", help="Local keyword filter over the loaded results.")
@click.option("--numero", default="", help="Local filter by complete process number.")
@click.pass_context
def listar(
    ctx: click.Context,
    busca: str | None,
    tribunal: str | None,
    grau: str | None,
    limite: int,
    paginas: int,
    palavra: str,
    numero: str,
) -> None:
    """List processes with filters and cursor pagination."""
    numero = apply_process_number_mask(numero)
    if numero and not is_valid_process_number(numero):
        console.print(f"[red]Número inválido: {escape(numero)}[/]")
        raise SystemExit(1)

    params = ProcessesListParams(
        q=busca or None,
        tribunal=tribunal or None,
        grau=Grau(grau.upper()) if grau else None,
        limit=limite,
    )
    controller = ProcessesController(_api(ctx), ConsoleNotifier(console), initial_params=params)
    controller.initial_load()
    for _ in range(paginas - 1):
        if controller.error or not controller.load_more():
            break

    if controller.error and not controller.processes:
        raise SystemExit(1)

    items = filter_processes(controller.processes, palavra, numero)
    _render_list(items, title="Processos")
    console.print(f"\n[processo.muted]{len(items)} of {len(controller.processes)} loaded processes shown.[/]")
    if controller.has_more:
        console.print(f"[processo.muted]More results available (cursor: {escape(controller.next_cursor)}).[/]")


def _render_partes(partes: list[SimplifiedParte], polo: Polo, page: int, per_page: int) -> None:
    if not partes:
        return
    result = paginate(partes, page, per_page)
    style = "processo.ativo" if polo == Polo.ATIVO else "processo.passivo"
    title = "Polo Ativo" if polo == Polo.ATIVO else "Polo Passivo"

    table = Table(title=f"{title} ({result.total})", title_style=style)
    table.add_column("Nome", style="processo.label")
    table.add_column("Tipo")
    table.add_column("Documento")
    table.add_column("Representantes")
    for parte in result.items:
        reps = "\n".join(f"{r.nome} ({r.tipo})" for r in parte.representantes)
        table.add_row(escape(parte.nome), escape(parte.tipo_parte), escape(parte.documento or ""), escape(reps))
    console.print(table)
    if result.total_pages > 1:
        console.print(f"[processo.muted]Página {result.page}/{result.total_pages}[/]")


def _render_detail(process: Process, page: int, per_page: int) -> None:
    content = Text()
    fields = [
        ("Tribunal", process.tribunal),
        ("Grau", GRAU_LABELS[process.grau]),
        ("Classe Principal", process.classe_principal),
        ("Assunto Principal", process.assunto_principal),
        ("Nível de Sigilo", str(process.nivel_sigilo)),
        ("Distribuição", _format_date(process.data_distribuicao)),
        ("Autuação", _format_date(process.data_autuacao)),
    ]
    for label, value in fields:
        content.append(f"{label}: ", style="processo.label")
        content.append(f"{value}\n")
    if len(process.classes) > 1:
        content.append("Classes: ", style="processo.label")
        content.append(", ".join(process.classes) + "\n")
    if len(process.assuntos) > 1:
        content.append("Assuntos: ", style="processo.label")
        content.append(", ".join(process.assuntos) + "\n")
    console.print(Panel(content, title=f"Processo {process.numero}", border_style="processo.border"))

    movimento = process.movimentos[-1] if process.movimentos else process.ultimo_movimento
    console.print(Panel(
        f"[bold]{escape(movimento.descricao)}[/]\n"
        f"{_format_date(movimento.data)} • Tipo: {escape(movimento.tipo)}",
        title="Último Movimento",
        border_style="green",
    ))

    for polo in (Polo.ATIVO, Polo.PASSIVO):
        _render_partes(process.partes_por_polo(polo), polo, page, per_page)

    tramitacao = process.tramitacao_atual
    text = f"[processo.label]Local:[/] {escape(tramitacao.local)}\n[processo.label]Status:[/] {tramitacao.status}"
    if tramitacao.data:
        text += f"\n[processo.label]Data:[/] {_format_date(tramitacao.data)}"
    console.print(Panel(text, title="Tramitação Atual", border_style="processo.muted"))


@cli.command()
@click.argument("numero")
@click.option("--pagina", default=1, show_default=True, help="Page of the party lists.")
@click.option("--por-pagina", default=PARTES_PER_PAGE, show_default=True, help="Parties per page.")
@click.pass_context
def ver(ctx: click.Context, numero: str, pagina: int, por_pagina: int) -> None:
    """View full details of a process by number."""
    numero = apply_process_number_mask(numero)
    if not is_complete_process_number(numero):
        console.print("[red]Número inválido. Formato: 0000000-00.0000.0.00.0000[/]")
        raise SystemExit(1)

    controller = ProcessController(_api(ctx), ConsoleNotifier(console))
    controller.set_case_number(numero)
    if controller.process is None:
        raise SystemExit(1)
    _render_detail(controller.process, pagina, por_pagina)


@cli.command()
@click.pass_context
def tribunais(ctx: click.Context) -> None:
    """List the court codes available for filtering."""
    try:
        codes = _api(ctx).get_tribunais()
    except ApiError as e:
        console.print(Text(e.message, style="red"))
        raise SystemExit(1)
    if not codes:
        console.print("[yellow]No courts available.[/]")
        return
    for code in codes:
        console.print(f"  {escape(code)}")


@cli.command()
@click.argument("mode", required=False, type=click.Choice([LIGHT, DARK, "toggle", "system"]))
@click.pass_context
def tema(ctx: click.Context, mode: str | None) -> None:
    """Show or change the colour theme."""
    theme: ThemeContext = ctx.obj["theme"]
    if mode == "toggle":
        theme.toggle()
    elif mode == "system":
        theme.use_system()
    elif mode:
        theme.set_mode(mode)
    source = "user preference" if theme.is_user_preference else "system"
    console.print(f"Theme: [bold]{theme.mode}[/] [processo.muted]({source})[/]")


BROWSER_HELP = """\
modo simples|avancado     switch search mode
palavra TEXTO             local keyword filter (simple)
numero NUMERO             local process number filter (simple)
tribunal [CODIGO]         court filter
grau [PRIMEIRO|SEGUNDO|SUPERIOR]
busca [TEXTO]             run an API search (advanced)
mais                      load more results
limpar                    clear filters
ver NUMERO                show process details
sair                      quit"""


def _render_browser(browser: ProcessesBrowser) -> None:
    controller = browser.controller
    if controller.loading and not controller.processes:
        console.print("[processo.muted]Carregando processos...[/]")
        return
    if controller.error:
        console.print(Panel(Text(controller.error.message), title="Erro", border_style="red"))
        console.print("[processo.muted]Type 'limpar' to retry without filters.[/]")
        return

    if browser.mode == SearchMode.SIMPLE:
        f = browser.simple
        grau = f.grau.value if f.grau else ""
        filters = f"palavra={f.keyword!r} numero={f.numero!r} tribunal={f.tribunal!r} grau={grau!r}"
    else:
        f = browser.advanced
        grau = f.grau.value if f.grau else ""
        filters = f"busca={f.query!r} tribunal={f.tribunal!r} grau={grau!r}"
    _render_list(browser.visible, title=f"Processos ({browser.mode.value})")
    console.print(f"[processo.muted]{escape(filters)}[/]")
    if browser.simple.numero and not is_complete_process_number(browser.simple.numero):
        console.print("[processo.muted]Digite o número completo do processo.[/]")
    if browser.can_load_more:
        console.print("[processo.muted]Type 'mais' to load more.[/]")


def _handle_browser_command(ctx: click.Context, browser: ProcessesBrowser, raw: str) -> bool:
    command, _, arg = raw.strip().partition(" ")
    command = command.lower()
    arg = arg.strip()
    advanced = browser.mode == SearchMode.ADVANCED

    if command in ("sair", "q", "exit"):
        return False
    if command == "modo":
        browser.set_mode(SearchMode.ADVANCED if arg.lower().startswith("a") else SearchMode.SIMPLE)
    elif command == "palavra":
        browser.set_keyword(arg)
    elif command == "numero":
        browser.set_numero(arg)
    elif command == "tribunal":
        (browser.set_advanced_tribunal if advanced else browser.set_tribunal)(arg.upper() or None)
    elif command == "grau":
        grau = arg.upper() or None
        if grau and grau not in Grau.__members__:
            console.print(f"[red]Unknown grau: {arg}[/]")
            return True
        (browser.set_advanced_grau if advanced else browser.set_grau)(grau)
    elif command == "busca":
        if not advanced:
            console.print("[yellow]'busca' is only available in advanced mode.[/]")
            return True
        browser.set_advanced_query(arg)
        browser.search()
    elif command == "mais":
        if not browser.load_more():
            console.print("[yellow]Nothing more to load.[/]")
    elif command == "limpar":
        browser.clear()
    elif command == "ver":
        ctx.invoke(ver, numero=arg)
        return True
    else:
        console.print(BROWSER_HELP, markup=False)
        return True

    browser.wait_idle()
    _render_browser(browser)
    return True


@cli.command()
@click.pass_context
def navegar(ctx: click.Context) -> None:
    """Interactive search with local filters and incremental loading."""
    controller = ProcessesController(_api(ctx), ConsoleNotifier(console))
    with ProcessesBrowser(controller) as browser:
        _render_browser(browser)
        while True:
            raw = click.prompt("processos", default="", show_default=False, prompt_suffix="> ")
            try:
                if not _handle_browser_command(ctx, browser, raw):
                    break
            except SystemExit:
                continue
