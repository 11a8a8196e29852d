"""a2ui-stream command line interface"""

import logging

import typer

from .stream_cmd import register_stream_commands

app = typer.Typer(help="Replay and validate A2UI agent streams", no_args_is_help=True)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """a2ui-stream"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


register_stream_commands(app)


def main():
    app()


__all__ = ["app", "main"]
