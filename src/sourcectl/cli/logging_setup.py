"""Route sourcectl log records to the terminal through click."""

import logging
import os

import click

_LEVEL_STYLES = {
    logging.WARNING: ("Warning: ", "yellow"),
    logging.ERROR: ("Error: ", "red"),
    logging.CRITICAL: ("Error: ", "red"),
}


class ClickEchoHandler(logging.Handler):
    """Logging handler that writes records to stderr with click.echo.

    The stream is resolved on every emit, so output follows click's current
    stderr (including CliRunner's captured streams in tests).
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            prefix, color = _LEVEL_STYLES.get(record.levelno, ("", None))
            if prefix:
                message = click.style(prefix, fg=color) + message
            click.echo(message, err=True)
        except Exception:
            self.handleError(record)


def configure_logging(*, verbose: bool) -> None:
    """Attach the click handler to the sourcectl logger.

    Debug output is enabled by --verbose or the SOURCECTL_DEBUG environment
    variable; otherwise progress (info) and above is shown. Safe to call more
    than once.
    """
    package_logger = logging.getLogger("sourcectl")
    for handler in list(package_logger.handlers):
        if isinstance(handler, ClickEchoHandler):
            package_logger.removeHandler(handler)

    debug = verbose or bool(os.environ.get("SOURCECTL_DEBUG"))
    handler = ClickEchoHandler()
    if debug:
        handler.setFormatter(logging.Formatter("[DEBUG %(name)s:%(lineno)d] %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
