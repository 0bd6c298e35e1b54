from __future__ import annotations

import typer

from .commands import access_cmd, cookies_cmd, files_cmd, pages_cmd, settings_cmd, tags_cmd, urls_cmd
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="hydrus",
        help="hydrus Client API command line",
        no_args_is_help=True,
    )

    app.add_typer(settings_cmd.app, name="settings")
    app.add_typer(access_cmd.app, name="access")
    app.add_typer(files_cmd.app, name="files")
    app.add_typer(tags_cmd.app, name="tags")
    app.add_typer(urls_cmd.app, name="urls")
    app.add_typer(cookies_cmd.app, name="cookies")
    app.add_typer(pages_cmd.app, name="pages")

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()
