"""
Command-line interface for objectprinting.
"""

import click
import logging
import yaml
from objectprinting import __version__
from objectprinting.printer import ObjectPrinter
from objectprinting.schemas import PrintSettings, make_settings
from objectprinting.utils.config import config, parse_indent_char

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__)
def cli():
    """objectprinting: indented text dumps of structured data"""
    pass


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--indent", default=None, help="Indent character, e.g. '\\t' or 'space' (default: from config)")
@click.option("--max-depth", type=int, default=None, help="Depth at which subtrees are elided (default: from config)")
@click.option("--placeholder", default=None, help="Text printed for elided subtrees")
def show(path: str, indent: str, max_depth: int, placeholder: str):
    """Print a YAML or JSON document as an indented tree."""
    try:
        settings = PrintSettings.from_config(config)
        overrides = {}
        if indent is not None:
            overrides["indent_char"] = parse_indent_char(indent)
        if max_depth is not None:
            overrides["max_depth"] = max_depth
        if placeholder is not None:
            overrides["placeholder"] = placeholder
        if overrides:
            settings = make_settings(**{**settings.model_dump(), **overrides})

        with open(path, encoding="utf-8") as handle:
            document = yaml.safe_load(handle)

        click.echo(ObjectPrinter(settings=settings).print(document), nl=False)

    except Exception as exc:
        click.echo(f"Error: {exc}", err=True)
        logger.exception("Printing %s failed", path)
        raise click.Abort()


@cli.command()
@click.option("--key", help="Config key to show")
def config_show(key: str):
    """Show configuration values."""
    values = config.as_dict()
    if key:
        if key in values:
            click.echo(f"{key}: {values[key]!r}")
        else:
            click.echo(f"Key '{key}' not found", err=True)
    else:
        click.echo("Configuration:")
        for name, value in values.items():
            click.echo(f"  {name}: {value!r}")


def main():
    """Entry point for CLI."""
    cli()
