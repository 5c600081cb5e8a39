#!/usr/bin/env python3
"""
Точка входа mdrowser: загрузка страницы и показ её в виде markdown.

Команды:
  url       Загрузить URL (спрашивает адрес, если он не передан)
  follow    Перейти по markdown-ссылке под курсором в файле
  browse    Интерактивный режим с одним переиспользуемым вьювером
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только stderr, если не указан)
  --log-format FORMAT Формат логирования

Дополнительно:
  --version, -v       Показать версию mdrowser

Пример:
  mdrowser url https://example.com/docs --output page.md
"""
import asyncio
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

import click

from mdrowser import __version__
from mdrowser.browser import Browser
from mdrowser.config import BrowserConfig, load_config
from mdrowser.errors import ConfigurationError
from mdrowser.export import save_markdown
from mdrowser.links import trim
from mdrowser.logger import init_logging
from mdrowser.pipeline import check_executables
from mdrowser.viewer import ViewerSurface

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _renderer(cfg: BrowserConfig) -> Callable[[List[str]], None]:
    def render(lines: List[str]) -> None:
        text = "\n".join(lines)
        if cfg.pager:
            click.echo_via_pager(text)
        else:
            click.echo(text)
    return render


def _require_executables(cfg: BrowserConfig) -> None:
    try:
        check_executables(cfg)
    except ConfigurationError as e:
        print_error(f'{cfg.notify_prefix} {e}')


async def _fetch_once(cfg: BrowserConfig, start: Callable[[Browser], Optional[asyncio.Task]]) -> Optional[List[str]]:
    """Один запуск: None, если загрузка не началась или завершилась ошибкой."""
    browser = Browser(cfg, ViewerSurface(render=_renderer(cfg)))
    task = start(browser)
    if task is None:
        return None
    await browser.drain()
    if task.exception() is not None:
        return None
    return browser.last_lines


def _finish(lines: Optional[List[str]], output: Optional[Path]) -> None:
    if lines is None:
        sys.exit(1)
    if output:
        try:
            saved = save_markdown(lines, output)
        except OSError as e:
            print_error(f'Failed to save markdown: {e}')
        click.echo(f'Saved: {saved}', err=True)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='mdrowser, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (только stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """mdrowser: HTML-страница → markdown во вьювере."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('url', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option(
    '--output', '-o', 'output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить markdown в файл'
)
@click.pass_context
def fetch_url(ctx, url, output):
    """Загрузить URL и показать его как markdown."""
    cfg = ctx.obj['config']
    _require_executables(cfg)
    if url is None:
        url = click.prompt('Fetch URL', default='', show_default=False, err=True)
    if trim(url) == '':
        return
    lines = asyncio.run(_fetch_once(cfg, lambda browser: browser.fetch(url)))
    _finish(lines, output)


@cli.command('follow', context_settings=CONTEXT_SETTINGS)
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--line', '-l', 'line_no', required=True, type=click.IntRange(min=1),
              help='Номер строки (с 1)')
@click.option('--column', '-c', 'column', required=True, type=click.IntRange(min=1),
              help='Позиция курсора в строке (с 1)')
@click.option(
    '--output', '-o', 'output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить markdown в файл'
)
@click.pass_context
def follow(ctx, file, line_no, column, output):
    """Перейти по ссылке [text](url) под курсором."""
    cfg = ctx.obj['config']
    _require_executables(cfg)
    try:
        lines = file.read_text(encoding='utf-8').splitlines()
    except UnicodeDecodeError as e:
        print_error(f'{file} is not valid UTF-8: {e}')
    if line_no > len(lines):
        print_error(f'Line {line_no} is out of range ({len(lines)} lines in {file})')
    text = lines[line_no - 1]
    result = asyncio.run(_fetch_once(cfg, lambda browser: browser.follow(text, column - 1)))
    _finish(result, output)


async def _browse(cfg: BrowserConfig) -> None:
    surface = ViewerSurface(render=_renderer(cfg))
    browser = Browser(cfg, surface)
    while True:
        try:
            raw = click.prompt('Fetch URL', default='', show_default=False, err=True)
        except click.Abort:
            break
        command = raw.strip()
        if command in (':q', ':quit'):
            break
        if command.startswith(':follow'):
            parts = command.split()
            if len(parts) != 3 or not (parts[1].isdigit() and parts[2].isdigit()):
                browser.notifier.notify('Usage: :follow LINE COLUMN', logging.WARNING)
                continue
            text = surface.line_at(int(parts[1]) - 1)
            if text is None:
                browser.notifier.notify('No markdown link under cursor', logging.WARNING)
                continue
            browser.follow(text, int(parts[2]) - 1)
        else:
            browser.fetch(command)
        await browser.drain()


@cli.command('browse', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def browse(ctx):
    """Интерактивный режим: URL, `:follow LINE COL` или `:quit`."""
    cfg = ctx.obj['config']
    _require_executables(cfg)
    asyncio.run(_browse(cfg))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
