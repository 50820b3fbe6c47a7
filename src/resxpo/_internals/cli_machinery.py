# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib


"""Command-line machinery for resxpo.

Warning:
    Non-public module (implementation detail), provided for didactical and
    educational purposes only. Subject to change without notice, including
    removal.

"""

from __future__ import annotations

import collections
import logging
from typing import TYPE_CHECKING, Callable, Literal, TypeVar

import click
from typing_extensions import Any, ParamSpec

from resxpo import _internals

if TYPE_CHECKING:
    import types
    from collections.abc import MutableSequence

    from typing_extensions import Self

PROG_NAME = _internals.PROG_NAME
VERSION = _internals.VERSION


# Logging
# =======


class ClickEchoStderrHandler(logging.Handler):
    """A [`logging.Handler`][] for `click` applications.

    Outputs log messages to [`sys.stderr`][] via [`click.echo`][].

    """

    def emit(self, record: logging.LogRecord) -> None:
        click.echo(
            self.format(record),
            err=True,
            color=getattr(record, 'color', None),
        )


class CLIofPackageFormatter(logging.Formatter):
    """Format log records as console diagnostics of a command-line tool.

    Every line of the message is prefixed with `"PROG_NAME: LABEL"`,
    where `LABEL` is `"Debug: "` for debug records, `"Warning: "` for
    warnings, and empty otherwise.  Warning labels are highlighted;
    use [`click.echo`][] to strip the styling where necessary.

    """

    def __init__(self, *, prog_name: str = PROG_NAME) -> None:
        super().__init__()
        self.prog_name = prog_name

    def format(self, record: logging.LogRecord) -> str:
        prefix = f'{self.prog_name}: '
        if record.levelno >= logging.ERROR:
            level_indicator = ''
        elif record.levelno >= logging.WARNING:
            level_indicator = f'{click.style("Warning", bold=True)}: '
        elif record.levelno >= logging.INFO:
            level_indicator = ''
        else:
            level_indicator = 'Debug: '
        parts = [
            ''.join(
                prefix + level_indicator + line
                for line in record.getMessage().splitlines(True)  # noqa: FBT003
            )
        ]
        if record.exc_info:
            parts.append(self.formatException(record.exc_info) + '\n')
        return ''.join(parts)


class StandardLoggingContextManager:
    """A reentrant context manager setting up standard CLI logging.

    Adds the given handler to the named logger, and if it had to be
    added, removes it again upon exiting the context.  If `warnings` is
    true, also divert Python warnings to the logging system for the
    duration of the context.

    Reentrant, but not thread safe, because it temporarily modifies
    global state.

    """

    def __init__(
        self,
        handler: logging.Handler,
        root_logger: str | None = None,
        *,
        warnings: bool = False,
    ) -> None:
        self.handler = handler
        self.base_logger = logging.getLogger(root_logger)
        self.warnings = warnings
        self.action_required: MutableSequence[bool] = collections.deque()

    def __enter__(self) -> Self:
        self.action_required.append(
            self.handler not in self.base_logger.handlers
        )
        if self.action_required[-1]:
            self.base_logger.addHandler(self.handler)
            if self.warnings:
                logging.captureWarnings(True)  # noqa: FBT003
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> Literal[False]:
        if self.action_required.pop():
            self.base_logger.removeHandler(self.handler)
            if self.warnings:
                logging.captureWarnings(False)  # noqa: FBT003
        return False


class StandardCLILogging:
    """The standard logging handlers of the resxpo command-line tool."""

    package_name = PROG_NAME.lower().replace(' ', '_').replace('-', '_')
    cli_formatter = CLIofPackageFormatter(prog_name=PROG_NAME)
    cli_handler = ClickEchoStderrHandler()
    cli_handler.addFilter(logging.Filter(name=package_name))
    cli_handler.setFormatter(cli_formatter)
    cli_handler.setLevel(logging.WARNING)
    warnings_handler = ClickEchoStderrHandler()
    warnings_handler.setFormatter(cli_formatter)
    warnings_handler.setLevel(logging.WARNING)

    @classmethod
    def ensure_standard_logging(cls) -> StandardLoggingContextManager:
        """Return a context manager to ensure standard logging is set up."""
        return StandardLoggingContextManager(
            handler=cls.cli_handler,
            root_logger=cls.package_name,
        )

    @classmethod
    def ensure_standard_warnings_logging(
        cls,
    ) -> StandardLoggingContextManager:
        """Return a context manager diverting warnings to the console."""
        return StandardLoggingContextManager(
            handler=cls.warnings_handler,
            root_logger='py.warnings',
            warnings=True,
        )


class CommandWithStandardLogging(click.Command):
    """A click command that sets up standard logging when called.

    Calling the command as a function installs the console logging
    handlers for the duration of the call.  The setup is bypassed when
    calling the `.main` method directly, as [`click.testing`][] does.

    """

    def __call__(  # pragma: no cover [external-api]
        self,
        *args: Any,  # noqa: ANN401
        **kwargs: Any,  # noqa: ANN401
    ) -> Any:  # noqa: ANN401
        with (
            StandardCLILogging.ensure_standard_logging(),
            StandardCLILogging.ensure_standard_warnings_logging(),
        ):
            return self.main(*args, **kwargs)


P = ParamSpec('P')
R = TypeVar('R')


def adjust_logging_level(
    ctx: click.Context,
    /,
    param: click.Parameter | None = None,
    value: int | None = None,
) -> None:
    """Change the logs that are emitted to standard error."""
    # Multiple options share this callback, so it may run several times.
    if param is None or value is None or ctx.resilient_parsing:
        return
    StandardCLILogging.cli_handler.setLevel(value)
    logging.getLogger(StandardCLILogging.package_name).setLevel(value)


debug_option = click.option(
    '--debug',
    'logging_level',
    is_flag=True,
    flag_value=logging.DEBUG,
    expose_value=False,
    callback=adjust_logging_level,
    help='also emit debug information (implies --verbose)',
)
verbose_option = click.option(
    '-v',
    '--verbose',
    'logging_level',
    is_flag=True,
    flag_value=logging.INFO,
    expose_value=False,
    callback=adjust_logging_level,
    help='emit extra/progress information to standard error',
)
quiet_option = click.option(
    '-q',
    '--quiet',
    'logging_level',
    is_flag=True,
    flag_value=logging.ERROR,
    expose_value=False,
    callback=adjust_logging_level,
    help='suppress even warnings, emit only errors',
)


def standard_logging_options(f: Callable[P, R]) -> Callable[P, R]:
    """Decorate the function with standard logging click options.

    Adds the three click options `-v`/`--verbose`, `-q`/`--quiet` and
    `--debug`, which call back into [`adjust_logging_level`][].

    """
    return debug_option(verbose_option(quiet_option(f)))
