# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

# ruff: noqa: TRY400

"""Command-line interface for resxpo."""

from __future__ import annotations

import io
import logging
import os
from typing import TYPE_CHECKING, BinaryIO

import click

from resxpo import _internals, _types, po_writer, resx
from resxpo._internals import cli_machinery

if TYPE_CHECKING:
    import datetime

__all__ = ('resxpo',)

PROG_NAME = _internals.PROG_NAME
VERSION = _internals.VERSION


def default_output_path(source: str, *, is_template: bool = False) -> str:
    """Return the output path for a given source path.

    The `.resx` extension (or any other) is replaced by `.po`, or by
    `.pot` for templates.

    """
    stem, _ = os.path.splitext(source)
    return stem + ('.pot' if is_template else '.po')


@click.command(
    context_settings={'help_option_names': ['-h', '--help']},
    cls=cli_machinery.CommandWithStandardLogging,
)
@click.option(
    '-o',
    '--output',
    metavar='PATH',
    type=click.Path(dir_okay=False, allow_dash=True),
    help=(
        'write to PATH (default: SOURCE with a .po or .pot extension; '
        '"-" for standard output)'
    ),
)
@click.option(
    '--template',
    'is_template',
    is_flag=True,
    help='write a .pot template file, with all translations left blank',
)
@click.option(
    '--comments',
    type=click.Choice([c.value for c in _types.CommentOptions]),
    default=_types.CommentOptions.FULL.value,
    show_default=True,
    help=(
        'which comments to write: both source and generated comments, '
        'only source comments, or none at all'
    ),
)
@click.option(
    '--format-flags/--no-format-flags',
    default=False,
    show_default=True,
    help='mark composite format strings with the csharp-format flag',
)
@click.option(
    '--msgctxt',
    metavar='TEXT',
    help='use TEXT as message context for all entries',
)
@click.version_option(version=VERSION, prog_name=PROG_NAME)
@cli_machinery.standard_logging_options
@click.argument('source', metavar='SOURCE', type=click.Path(dir_okay=False))
@click.pass_context
def resxpo(  # noqa: PLR0913
    ctx: click.Context,
    /,
    *,
    source: str,
    output: str | None = None,
    is_template: bool = False,
    comments: str = _types.CommentOptions.FULL.value,
    format_flags: bool = False,
    msgctxt: str | None = None,
) -> None:
    """Convert a .resx resource file to a gettext PO file.

    Read the string resources from SOURCE and write them, together with
    their comments, as a PO file (or, with --template, as a POT file).

    """
    logger = logging.getLogger(PROG_NAME)
    try:
        items = resx.read_resx(source)
    except OSError as exc:
        logger.error(
            'Cannot read resource file %r: %s',
            source,
            exc.strerror,
            extra={'color': ctx.color},
        )
        ctx.exit(1)
    except resx.NotAResxFileError as exc:
        logger.error('%s', exc, extra={'color': ctx.color})
        ctx.exit(1)
    logger.debug('Read %d entries from %r', len(items), source)

    try:
        revision_time = po_writer.get_revision_time()
    except RuntimeError as exc:
        logger.error('%s', exc, extra={'color': ctx.color})
        ctx.exit(1)

    def clock() -> datetime.datetime:
        return revision_time

    if output is None:
        output = default_output_path(source, is_template=is_template)
    options = _types.WriterOptions(
        comments=_types.CommentOptions(comments),
        format_flags=format_flags,
        msgctxt=msgctxt,
    )
    outfile: BinaryIO
    try:
        outfile = io.BytesIO() if output == '-' else open(output, 'wb')  # noqa: SIM115
        with po_writer.PoResourceWriter(
            outfile,
            options,
            os.path.basename(source),
            is_template=is_template,
            clock=clock,
        ) as writer:
            count = writer.add_resources(items)
            if output == '-':
                writer.flush()
                click.echo(outfile.getvalue(), nl=False)  # type: ignore[attr-defined]
    except OSError as exc:
        logger.error(
            'Cannot write output file %r: %s',
            output,
            exc.strerror,
            extra={'color': ctx.color},
        )
        ctx.exit(1)
    logger.info(
        'Wrote %d entries to %s',
        count,
        'standard output' if output == '-' else repr(output),
        extra={'color': ctx.color},
    )


if __name__ == '__main__':
    resxpo()
