#!/usr/bin/env python3
"""
Command line entry point of TreeScout.

Commands:
  crawl     Crawl a repository tree and write the markdown checklist
  config    Show the resolved configuration

Common options:
  --config PATH       YAML/JSON config file (values are overridden by options)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only if omitted)
  --log-format FORMAT Logging format (e.g. "%(asctime)s %(levelname)s %(message)s")

crawl options:
  --url URL           Listing page to start from (https://github.com/<owner>/<repo>)
  --ext EXT           Extension of tracked files (".md", ".cs", ...)
  --ignore "A B"      Space separated fragments of directory names to skip
  --out-dir DIR       Directory of the markdown file (default: results)
  --stdout            Print the markdown instead of writing a file
  --json PATH         Also save a JSON report
  --max-concurrency N Limit fetches in flight (unbounded by default)
  --crawl-timeout SEC Timeout of the whole crawl (seconds)

Example:
  tree-scout crawl --ignore "Platform.Setters.Tests" --url https://github.com/linksplatform/Setters/ --ext ".cs"
"""
import sys
import asyncio
from pathlib import Path

import click

from tree_scout import __version__
from tree_scout.config import load_config
from tree_scout.engine import start_crawl
from tree_scout.errors import InputValidationError, TreeScoutError
from tree_scout.logger import init_logging, logger
from tree_scout.report.json_report import render_json
from tree_scout.report.markdown_report import render_markdown, write_markdown
from tree_scout.utils import result_path

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _load_config(ctx, **overrides):
    try:
        return load_config(ctx.obj.get('config_path'), **overrides)
    except (InputValidationError, FileNotFoundError) as e:
        print_error(
            f'Invalid input: {e}\n'
            'Usage: tree-scout crawl --url "https://github.com/<owner>/<repo>" --ext "<extension>" '
            '[--ignore "<dir fragment> ..."]'
        )


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='TreeScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stderr only if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Format string for log records'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """TreeScout: checklist of repository files with a given extension."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option('--url', '-u', 'url', default=None, help='Repository listing page to crawl.')
@click.option('--ext', '-e', 'extension', default=None, help='Extension of tracked files, e.g. ".md".')
@click.option('--ignore', '-i', 'ignore', default=None, help='Directory name fragments to skip, space separated.')
@click.option(
    '--out-dir', '-o', 'out_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Directory of the markdown file [default: results]'
)
@click.option('--stdout', 'to_stdout', is_flag=True, help='Print the markdown instead of writing a file')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Also save a JSON report'
)
@click.option('--max-concurrency', 'max_concurrency', type=int, default=None, help='Limit fetches in flight')
@click.option('--timeout', 'timeout', type=float, default=None, help='Timeout of one request (seconds)')
@click.option('--crawl-timeout', 'crawl_timeout', type=float, default=None, help='Timeout of the whole crawl (seconds)')
@click.pass_context
def crawl(ctx, url, extension, ignore, out_dir, to_stdout, json_output, max_concurrency, timeout, crawl_timeout):
    """Crawl the tree and write the markdown checklist."""
    cfg = _load_config(
        ctx,
        root_url=url,
        extension=extension,
        ignore=ignore,
        output_dir=out_dir,
        max_concurrency=max_concurrency,
        timeout=timeout,
    )
    logger.info('Crawling %s for *%s files', cfg.root_url, cfg.extension)
    try:
        if crawl_timeout:
            report = asyncio.run(
                asyncio.wait_for(start_crawl(cfg), timeout=crawl_timeout)
            )
        else:
            report = asyncio.run(start_crawl(cfg))
    except asyncio.TimeoutError:
        print_error(f'Crawl did not finish within {crawl_timeout} seconds')
    except TreeScoutError as e:
        print_error(f'Crawl failed: {e}')
    except Exception as e:
        logger.debug('Unexpected crawl error', exc_info=True)
        print_error(f'Crawl failed with unexpected error: {e!r}')

    if to_stdout:
        click.echo(render_markdown(report), nl=False)
    else:
        try:
            saved = write_markdown(report, result_path(cfg.root_url, cfg.output_dir))
            click.echo(f'Markdown report: {saved}')
        except OSError as e:
            print_error(f'Could not write markdown report: {e}')

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}', err=to_stdout)
        except OSError as e:
            print_error(f'Could not write JSON report: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.option('--url', '-u', 'url', default=None, help='Repository listing page to crawl.')
@click.option('--ext', '-e', 'extension', default=None, help='Extension of tracked files.')
@click.option('--ignore', '-i', 'ignore', default=None, help='Directory name fragments to skip.')
@click.pass_context
def show_config(ctx, url, extension, ignore):
    """Show the resolved configuration as JSON."""
    cfg = _load_config(ctx, root_url=url, extension=extension, ignore=ignore)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
