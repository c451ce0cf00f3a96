"""Command-line interface for responsive_images."""

import tomllib
from pathlib import Path

import click

from .config import Config


def _load_config(config_path: Path | None) -> Config:
    """Load an explicit config file, or discover one from the cwd."""
    try:
        if config_path is not None:
            return Config.load(config_path)
        return Config.find_and_load()
    except tomllib.TOMLDecodeError as e:
        click.echo(f"Error: Invalid TOML: {e}", err=True)
        raise SystemExit(1)


@click.group()
@click.version_option()
def main():
    """Responsive images - srcset generation for convention-named markdown images."""
    pass


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write HTML here"
)
@click.option("--config", "-c", "config_path", type=click.Path(path_type=Path), help="Config file")
@click.option("--sizes", default=None, help="Value for the sizes attribute")
@click.option("--lazy/--no-lazy", default=None, help="Add loading=\"lazy\" (default from config)")
@click.option("--debug", "-d", is_flag=True, help="Report malformed images")
@click.option("--standalone", "-s", is_flag=True, help="Wrap output in a full HTML page")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def render(
    file: Path,
    output: Path | None,
    config_path: Path | None,
    sizes: str | None,
    lazy: bool | None,
    debug: bool,
    standalone: bool,
    verbose: bool,
):
    """Render a markdown file to HTML."""
    from .logging import debug as log_debug
    from .logging import setup_logging
    from .markdown_utils import parse_markdown_file, render_markdown
    from .postprocess import summarize_images

    setup_logging(verbose=verbose)
    config = _load_config(config_path)

    # Command-line options override the config file
    if sizes is not None:
        config.images.sizes = sizes or None
    if lazy is not None:
        config.images.lazy = lazy
    if debug:
        config.images.debug = True

    metadata, content = parse_markdown_file(file)
    html_content = render_markdown(content, config)

    if standalone:
        from .templates import render_page

        title = str(metadata.get("title") or file.stem)
        html_content = render_page(html_content, title=title)

    summary = summarize_images(html_content)
    log_debug(
        f"{file}: {len(summary.responsive)} responsive, {len(summary.plain)} plain images"
    )

    if output is not None:
        output.write_text(html_content, encoding="utf-8")
        click.echo(f"Wrote {output}")
    else:
        click.echo(html_content)


@main.command()
@click.argument("href")
@click.option("--sizes", default=None, help="Value for the sizes attribute")
@click.option("--lazy/--no-lazy", default=True, help="Add loading=\"lazy\"")
def inspect(href: str, sizes: str | None, lazy: bool):
    """Show how a single image reference is decoded."""
    from .renderer import ResponsiveImageRenderer
    from .urls import URLParseError, classify
    from .variants import Malformed, Matched, decode_variants, parse_filename

    try:
        url = classify(href)
    except URLParseError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    kind = "absolute" if url.is_absolute else "relative"
    click.echo(f"URL:       {kind} {url.origin}{url.pathname}{url.query}{url.fragment}")
    click.echo(f"Filename:  {url.filename}")

    result = parse_filename(url.filename)
    if isinstance(result, Malformed):
        click.echo("Error: Filename contains '__' but does not match the size pattern", err=True)
        raise SystemExit(1)
    if not isinstance(result, Matched):
        click.echo("No size variants (rendered as a plain image)")
        raise SystemExit(1)

    try:
        variants = decode_variants(result.size_list, result.extension)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    click.echo(f"Base:      {result.base}")
    for variant in variants:
        click.echo(f"Variant:   {variant.width}x{variant.height} {variant.extension}")

    renderer = ResponsiveImageRenderer(sizes=sizes, lazy=lazy)
    click.echo(renderer.render(href))


@main.command()
@click.argument(
    "files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option("--quiet", "-q", is_flag=True, help="Only report problems")
def check(files: tuple[Path, ...], quiet: bool):
    """Check markdown files for malformed variant filenames."""
    from .checker import check_document
    from .markdown_utils import parse_markdown_file

    problems = 0
    for file in files:
        _, content = parse_markdown_file(file)
        for finding in check_document(content):
            if finding.is_problem:
                problems += 1
                click.echo(f"{file}:{finding.line}: {finding.href}: {finding.message}", err=True)
            elif not quiet:
                click.echo(f"{file}:{finding.line}: {finding.href}: {finding.message}")

    if problems:
        click.echo(f"\n{problems} problem(s) found", err=True)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
