# === FILE: a11y_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска A11yScout через командную строку.

Команды:
  scan URL   Обойти сайт, проверить доступность страниц и сохранить отчёты
  config     Показать итоговую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: a11y_scout.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда scan опции:
  -d, --depth N           Максимальная глубина обхода
  -o, --output DIR        Каталог для отчётов
  -c, --concurrency N     Число страниц, анализируемых параллельно
  -p, --project-key KEY   Метка проекта
  -t, --timeout MS        Таймаут навигации (мс)
  --summary TEXT          Произвольное резюме для отчёта
  --exclude PATTERNS      Исключаемые подстроки URL через запятую
  --standard STANDARD     WCAG2A, WCAG2AA или WCAG2AAA
  --include-warnings      Включать предупреждения
  --include-notices       Включать уведомления
  --json PATH             Дополнительно сохранить JSON-сводку в файл
  --template DIR          Папка с Jinja2-шаблонами
  --scan-timeout SEC      Таймаут всего обхода (секунд)

Пример:
  a11y-scout scan https://example.com --depth 2 --include-warnings --exclude admin,login
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from a11y_scout import __version__
from a11y_scout.config import load_config
from a11y_scout.engine import start_scan, write_reports
from a11y_scout.exceptions import SetupError
from a11y_scout.logger import DEFAULT_FORMAT, init_logging

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _load(ctx, **overrides):
    try:
        return load_config(ctx.obj['config_path'], **overrides)
    except ValidationError as e:
        print_error(f'Некорректная конфигурация: {e}')
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='A11yScout, version %(version)s')
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
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
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Краулер доступности сайта на базе pa11y."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('scan', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option('--depth', '-d', 'max_depth', type=int, default=None, help='Максимальная глубина обхода [3]')
@click.option('--output', '-o', 'output_dir', default=None, help='Каталог для отчётов [accessibility-reports]')
@click.option('--concurrency', '-c', 'concurrency', type=int, default=None, help='Параллельных страниц в пакете [3]')
@click.option('--project-key', '-p', 'project_key', default=None, help='Метка проекта [ACCESSIBILITY]')
@click.option('--timeout', '-t', 'timeout_ms', type=int, default=None, help='Таймаут навигации, мс [30000]')
@click.option('--wait', 'wait_ms', type=int, default=None, help='Пауза после загрузки перед анализом, мс [1000]')
@click.option('--summary', 'summary', default=None, help='Произвольное резюме для отчёта')
@click.option('--exclude', 'exclude', default=None, help='Исключаемые подстроки URL через запятую')
@click.option('--standard', 'standard', default=None,
              type=click.Choice(['WCAG2A', 'WCAG2AA', 'WCAG2AAA']), help='Стандарт доступности [WCAG2AA]')
@click.option('--include-warnings', 'include_warnings', is_flag=True, default=None, help='Включать предупреждения')
@click.option('--include-notices', 'include_notices', is_flag=True, default=None, help='Включать уведомления')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-сводку в файл (по умолчанию <output>/summary.json)'
)
@click.option(
    '--template', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблонами'
)
@click.option(
    '--scan-timeout', 'scan_timeout',
    type=float,
    default=None,
    help='Таймаут всего обхода (секунд)'
)
@click.pass_context
def scan(ctx, url, json_output, template_dir, scan_timeout, **options):
    """Обойти сайт, проанализировать страницы и сгенерировать отчёты."""
    cfg = _load(ctx, start_url=url, **options)
    click.secho(f'Starting crawl of {cfg.start_url}', fg='cyan')
    click.secho(f'Standard: {cfg.standard}', fg='cyan')
    click.secho(f'Max depth: {cfg.max_depth}', fg='cyan')
    click.secho(f'Output directory: {cfg.output_dir}', fg='cyan')
    try:
        if scan_timeout:
            result = asyncio.run(
                asyncio.wait_for(start_scan(cfg), timeout=scan_timeout)
            )
        else:
            result = asyncio.run(start_scan(cfg))
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {scan_timeout} секунд')
    except SetupError as e:
        print_error(f'Обход невозможен: {e}')

    if not result.pages:
        click.secho('No pages were successfully analyzed.', fg='yellow')

    try:
        index_path = write_reports(result, cfg, template_dir=template_dir, json_path=json_output)
    except OSError as e:
        print_error(f'Ошибка при сохранении отчётов: {e}')

    summary = result.summary
    click.secho(f'\nOpen the report: {index_path.resolve()}', fg='green')
    click.secho('\nSummary Statistics:', fg='cyan')
    click.secho(f'Pages analyzed: {summary.total_pages}', fg='cyan')
    click.secho(f'Total errors: {summary.total_errors}', fg='red')
    click.secho(f'Total warnings: {summary.total_warnings}', fg='yellow')
    click.secho(f'Total notices: {summary.total_notices}', fg='blue')
    if summary.failed_pages:
        click.secho(f'Pages not analyzed: {len(summary.failed_pages)}', fg='yellow')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.pass_context
def show_config(ctx, url):
    """Показать текущую конфигурацию в JSON."""
    cfg = _load(ctx, start_url=url)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
