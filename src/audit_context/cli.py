"""Command-line interface for audit-context."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
import yaml

from audit_context import __version__, schemas
from audit_context.commands import CommandRunner, SubprocessRunner
from audit_context.config import AuditConfig, ConfigError, get_default_config
from audit_context.project import ProjectNotFoundError, audit_project
from audit_context.report import audit_repository, render_project, render_repository

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = {
    'help_option_names': ['-h', '--help'],
    'max_content_width': 120
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_config(config_path: Optional[str]) -> AuditConfig:
    if not config_path:
        return get_default_config()
    try:
        return AuditConfig.from_yaml(config_path)
    except ConfigError as exc:
        raise click.BadParameter(str(exc), param_hint="'--config'") from exc


def _emit(text: str, output: Optional[str]) -> None:
    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(text)
        click.echo(f"Report saved to {output_path}")
    else:
        click.echo(text)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument('project', required=False)
@click.option('--root', type=click.Path(exists=True, file_okay=False), default='.', show_default=True,
              help='Repository root to audit')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='YAML file overriding the audit policy tables')
@click.option('--format', 'fmt', type=click.Choice(['markdown', 'json']), default='markdown',
              show_default=True, help='Report format')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write the report to a file')
@click.option('--print-config', is_flag=True, help='Print the effective configuration as YAML and exit')
@click.option('--export-schemas', 'schema_dir', type=click.Path(file_okay=False),
              help='Write JSON schemas for the configuration and report formats to a directory and exit')
@click.option('--verbose', '-v', is_flag=True, help='Log debug output to stderr')
@click.version_option(version=__version__)
@click.pass_context
def cli(
    ctx,
    project: Optional[str],
    root: str,
    config_path: Optional[str],
    fmt: str,
    output: Optional[str],
    print_config: bool,
    schema_dir: Optional[str],
    verbose: bool,
):
    """Audit PROJECT, or the whole repository when PROJECT is omitted."""
    _configure_logging(verbose)
    cfg = _load_config(config_path)

    if print_config:
        click.echo(yaml.safe_dump(cfg.to_dict(), default_flow_style=False, sort_keys=False, allow_unicode=True))
        return

    if schema_dir:
        schemas.export(Path(schema_dir))
        click.echo(f"Schemas saved to {schema_dir}")
        return

    runner: CommandRunner = (ctx.obj or {}).get('runner') or SubprocessRunner(cfg.commands)

    try:
        if project:
            audit = audit_project(root, project, runner, cfg.project)
            text = render_project(audit, cfg)
        else:
            audit = audit_repository(root, runner, cfg)
            text = render_repository(audit, cfg)
    except ProjectNotFoundError as exc:
        click.echo(str(exc), err=True)
        ctx.exit(1)
    except Exception:
        logger.exception("audit failed")
        ctx.exit(1)

    if fmt == 'json':
        text = json.dumps(audit.to_dict(), indent=2, ensure_ascii=False)
    _emit(text, output)


if __name__ == '__main__':
    cli()
