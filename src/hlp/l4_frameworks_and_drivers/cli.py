"""CLI entry point for hlp."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Coroutine
from typing import Any, NoReturn

import click
from pydantic import ValidationError

from hlp import __version__
from hlp.l1_entities.errors import SilentTerminationError
from hlp.l2_use_cases.utils.prompt_builder import build_ask_content, build_ask_messages
from hlp.l3_interface_adapters.gateways.file_persistence import FileTranscriptStore, StdinTargetError
from hlp.l3_interface_adapters.gateways.paths import LOG_DIR
from hlp.l3_interface_adapters.gateways.yaml_config_loader import YamlConfigLoader
from hlp.l4_frameworks_and_drivers.infra_config import (
    CONFIG_KEYS,
    InfraConfig,
    build_app_config,
    get_config_value,
    set_config_value,
)
from hlp.l4_frameworks_and_drivers.logging_setup import setup_file_logging

log = logging.getLogger('hlp.cli')


def _fail(message: object) -> NoReturn:
    click.echo(f'Error: {message}', err=True)
    sys.exit(1)


def _chat_overrides(model: str | None, max_tokens: int | None, temperature: float | None) -> dict | None:
    chat: dict = {}
    if model:
        chat['model'] = model.strip()
    if max_tokens is not None:
        chat['max_tokens'] = max_tokens
    if temperature is not None:
        chat['temperature'] = temperature
    return {'chat': chat} if chat else None


def _load_config(ctx: click.Context, overrides: dict | None = None):
    try:
        raw = YamlConfigLoader().load_raw(ctx.obj['config_path'], overrides=overrides)
        return build_app_config(raw), InfraConfig.model_validate(raw)
    except FileNotFoundError as e:
        _fail(e)
    except ValidationError as e:
        _fail(f'invalid configuration: {e}')


def _build_container(ctx: click.Context, overrides: dict | None):
    from hlp.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: SDKs not loaded on --help
        DependencyContainer,
    )

    config, infra = _load_config(ctx, overrides)
    container = DependencyContainer(config, infra)
    _preflight_ollama(container)
    return container


def _preflight_ollama(container) -> None:
    if container.infra.llm_provider != 'ollama':
        return
    ok, err = container.streamer.check_connectivity()
    if not ok:
        click.echo(f'Warning: Ollama not reachable ({err}).', err=True)


def _run(coro: Coroutine[Any, Any, Any]) -> Any:
    """Run *coro*; a closed input stream exits cleanly, every other failure exits 1."""
    try:
        return asyncio.run(coro)
    except SilentTerminationError as e:
        log.debug('%s', e)
        sys.exit(0)
    except Exception as e:
        log.error('Command failed: %s', e, exc_info=True)
        _fail(e)


@click.group()
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(dir_okay=False),
    help='Path to YAML config file.',
)
@click.option('--debug', is_flag=True, default=False, help='Write a debug log to the user log directory.')
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, config_path, debug):
    """hlp -- chat with a language model from the terminal or a transcript file."""
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path
    if debug:
        setup_file_logging(LOG_DIR)


@cli.command()
@click.argument('question', nargs=-1)
@click.option('-t', '--tokens', 'max_tokens', type=int, default=None, help='Maximum tokens in each reply.')
@click.option('--temp', 'temperature', type=float, default=None, help='Sampling temperature.')
@click.option('--bash', is_flag=True, default=False, help='Answer only with commented, valid bash.')
@click.option('-m', '--model', default=None, help='Model name (overrides config).')
@click.option(
    '-a',
    '--attach',
    'attachments',
    multiple=True,
    type=click.Path(allow_dash=True, dir_okay=False),
    help="Attach a file at the end of the message; '-' reads stdin.",
)
@click.option('-o', '--once', is_flag=True, default=False, help='Ask once and exit instead of prompting.')
@click.pass_context
def ask(ctx, question, max_tokens, temperature, bash, model, attachments, once):
    """Ask a question and keep chatting until a blank line, Ctrl-C or end of input."""
    container = _build_container(ctx, _chat_overrides(model, max_tokens, temperature))
    try:
        attached = [container.transcripts.read(path) for path in attachments]
    except OSError as e:
        _fail(f'cannot build message: {e}')

    messages = build_ask_messages(build_ask_content(question, attached), bash=bash)
    outcome = _run(container.session(once=once).run(messages))
    log.debug('ask finished: %s', outcome)


@cli.command()
@click.argument('file', type=click.Path(allow_dash=True, dir_okay=False))
@click.argument('write', required=False, default=None, type=click.Path(allow_dash=True, dir_okay=False))
@click.option('-t', '--tokens', 'max_tokens', type=int, default=None, help='Maximum tokens in the reply.')
@click.option('--temp', 'temperature', type=float, default=None, help='Sampling temperature.')
@click.option('-m', '--model', default=None, help='Model name (overrides config).')
@click.pass_context
def chat(ctx, file, write, max_tokens, temperature, model):
    """Stream a reply to the transcript FILE ('-' for stdin).

    If WRITE is given the transcript plus the reply is saved there; '-' writes
    back into FILE.
    """
    if write is not None:
        try:
            FileTranscriptStore.resolve_target(file, write)
        except StdinTargetError as e:
            _fail(e)

    container = _build_container(ctx, _chat_overrides(model, max_tokens, temperature))
    try:
        transcript = container.transcripts.read(file)
    except OSError as e:
        _fail(e)

    use_case = container.chat_file()
    reply = _run(use_case.execute(transcript))
    if write is None:
        return

    try:
        path = container.transcripts.append(file, write, transcript, reply)
    except OSError as e:
        _fail(e)
    log.debug('Transcript continued in %s', path)


@cli.group('config')
def config_cmd():
    """Read and change stored settings."""


def _display(key: str, value: object) -> str:
    if value is None:
        return ''
    if key == 'api_key':
        text = str(value)
        return '*' * max(len(text) - 4, 0) + text[-4:]
    return str(value)


@config_cmd.command('get')
@click.argument('key', type=click.Choice(sorted(CONFIG_KEYS)))
@click.pass_context
def config_get(ctx, key):
    """Print the current value of KEY."""
    config, infra = _load_config(ctx)
    value = get_config_value(config, infra, key)
    click.echo('' if value is None else str(value))


@config_cmd.command('set')
@click.argument('key', type=click.Choice(sorted(CONFIG_KEYS)))
@click.argument('value')
@click.pass_context
def config_set(ctx, key, value):
    """Validate VALUE and store it under KEY."""
    loader = YamlConfigLoader()
    config_path = ctx.obj['config_path']
    try:
        raw = loader.load_raw(config_path) if loader.resolve_path(config_path).exists() else {}
        updated = set_config_value(raw, key, value.strip())
    except ValidationError as e:
        _fail(f'invalid value for {key}: {e.errors()[0]["msg"]}')
    path = loader.save_raw(updated, config_path)
    click.echo(f'{key} saved to {path}')


@config_cmd.command('list')
@click.pass_context
def config_list(ctx):
    """Print every setting with its current value."""
    config, infra = _load_config(ctx)
    for key in sorted(CONFIG_KEYS):
        click.echo(f'{key}: {_display(key, get_config_value(config, infra, key))}')


def main() -> None:
    cli(obj={})
