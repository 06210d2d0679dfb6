"""Manuscript Studio CLI entry point."""
from __future__ import annotations

import sys

import click


def _root_class(ctx, param, value: str) -> str:
    from manuscript_studio.stylesheet.scoping import validate_root_class

    try:
        return validate_root_class(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


@click.group()
def cli():
    """Manuscript Studio: live CSS editor and EPUB builder."""
    pass


@cli.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", default=3000, type=int, help="Port to bind to")
@click.option(
    "--project",
    default=None,
    type=click.Path(exists=True, file_okay=False),
    help="Project folder to open on startup",
)
@click.option(
    "--root-class",
    default="book-content",
    callback=_root_class,
    help="Class of the book container",
)
@click.option("--config", "config_path", default="config.ini", help="Config file for the Pandoc path")
@click.option("--debug/--no-debug", default=False, help="Enable debug mode")
def serve(
    host: str,
    port: int,
    project: str | None,
    root_class: str,
    config_path: str,
    debug: bool,
) -> None:
    """Start the Manuscript Studio editor."""
    import logging

    from manuscript_studio.config import StudioConfig
    from manuscript_studio.editor.workspace import Workspace
    from manuscript_studio.web.app import create_app

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = StudioConfig(host=host, port=port, root_class=root_class, config_path=config_path)
    workspace = Workspace(config)
    if project:
        workspace.open(project)

    app = create_app(workspace=workspace)
    click.echo(f"Editor: http://{host}:{port}")
    app.run(host=host, port=port, debug=debug)


@cli.command("compile")
@click.argument("project", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--root-class",
    default="book-content",
    callback=_root_class,
    help="Class of the book container",
)
@click.option("--pandoc", "pandoc_path", default=None, help="Pandoc executable to use")
@click.option("--output-dir", default=None, help="Folder for the EPUB (default ~/Downloads)")
@click.option("--config", "config_path", default="config.ini", help="Config file for the Pandoc path")
def compile_project(
    project: str,
    root_class: str,
    pandoc_path: str | None,
    output_dir: str | None,
    config_path: str,
) -> None:
    """Compile a project folder to EPUB without starting the editor."""
    from manuscript_studio.compiler.pandoc import PandocCompiler
    from manuscript_studio.config import PandocSettings, StudioConfig
    from manuscript_studio.editor.workspace import Workspace
    from manuscript_studio.errors import StudioError

    overrides = {"downloads_dir": output_dir} if output_dir else {}
    config = StudioConfig(root_class=root_class, config_path=config_path, **overrides)
    compiler = PandocCompiler(
        PandocSettings(config_path),
        timeout=config.compile_timeout,
        executable_path=pandoc_path,
    )
    workspace = Workspace(config, compiler=compiler)

    try:
        workspace.open(project)
        result = workspace.compile()
    except StudioError as exc:
        click.echo(f"Error ({exc.error_type}): {exc.message}", err=True)
        sys.exit(1)

    click.echo(result.message)


@cli.command()
@click.argument("css_file", type=click.File("r", encoding="utf-8"))
@click.option(
    "--root-class",
    default="book-content",
    callback=_root_class,
    help="Class of the book container",
)
def strip(css_file, root_class: str) -> None:
    """Print CSS_FILE with the book container class removed, as Pandoc sees it."""
    from manuscript_studio.stylesheet.scoping import strip_namespace

    click.echo(strip_namespace(css_file.read(), root_class), nl=False)
