#!/usr/bin/env python3
"""Cardforge CLI - render CSV records into SVG cards."""

import logging

import click

from cardforge import __version__
from cardforge.cards.generator import CardGenerator
from cardforge.config import load_config
from cardforge.errors import CardForgeError
from cardforge.text.layout import Geometry, describe_lines, layout_blocks
from cardforge.text.markup import parse_markup


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """Cardforge - render CSV records into SVG cards.

    Merge titles, images and markup back text into an SVG template.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )


@cli.command()
@click.argument("template", type=click.Path(exists=True, dir_okay=False))
@click.argument("csv_path", metavar="CSV", type=click.Path(exists=True, dir_okay=False))
@click.option("--out-dir", default="output", show_default=True, help="Output directory")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False),
              help="YAML config file (default: $CARDFORGE_CONFIG)")
@click.option("--parallel", type=click.IntRange(min=1), default=1, help="Worker threads")
def generate(template, csv_path, out_dir, config_path, parallel):
    """Render every row of CSV into TEMPLATE."""
    try:
        generator = CardGenerator(load_config(config_path))
        generator.load_template(template)
        written = generator.generate_cards(csv_path, out_dir, parallel=parallel)
    except CardForgeError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Generated {len(written)} cards in {out_dir}")


@cli.command()
@click.argument("text", required=False)
@click.option("--file", "text_file", type=click.File("r", encoding="utf-8"),
              help="Read markup from a file instead")
@click.option("--font-size", type=click.FloatRange(min=0, min_open=True), default=None,
              help="Font size (default from config)")
@click.option("--max-width", type=click.FloatRange(min=0, min_open=True), default=None,
              help="Wrap width (default from config)")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False))
def layout(text, text_file, font_size, max_width, config_path):
    """Show how TEXT wraps, one output line per row."""
    if text_file is not None:
        text = text_file.read()
    if text is None:
        raise click.UsageError("Provide TEXT or --file")
    # Allow literal "\n" on the command line
    text = text.replace("\\n", "\n")

    try:
        settings = load_config(config_path).layout
    except CardForgeError as e:
        raise click.ClickException(str(e)) from e

    geometry = Geometry(
        font_size=font_size if font_size is not None else settings.default_font_size,
        max_width=max_width if max_width is not None else settings.max_width,
    )
    for row in describe_lines(layout_blocks(parse_markup(text), geometry)):
        click.echo(row)


if __name__ == "__main__":
    cli()
