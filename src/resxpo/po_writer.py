# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""Writer for gettext PO and POT files.

Serializes [resource entries][resxpo._types.ResourceEntry] into the
line-oriented gettext PO format.  The output is always UTF-8 without
a byte order mark, with CRLF line terminators, and always starts with
a metadata header, even if no entries are ever written.

"""

from __future__ import annotations

import datetime
import io
import logging
import os
import re
from typing import TYPE_CHECKING, Callable, Final

from typing_extensions import assert_never

from resxpo import _internals
from resxpo._types import (
    CommentOptions,
    PoItem,
    ResourceItem,
    TranslationFlags,
    WriterOptions,
)

if TYPE_CHECKING:
    import types
    from collections.abc import Iterable
    from typing import BinaryIO, Literal

    from typing_extensions import Self

    from resxpo._types import ResourceEntry

__all__ = (
    'PoResourceWriter',
    'escape',
    'escape_comment',
    'resolve_culture',
)

PROG_NAME = _internals.PROG_NAME
VERSION = _internals.VERSION

DEFAULT_CULTURE = 'en-US'
ORIGINAL_MESSAGE_COMMENT_PREFIX = '#. Original message: '
SEGMENT_BREAK = '"\r\n"'

_CULTURE_FROM_FILENAME = re.compile(r'\.([\w-]+)\.resx')
_STRING_ESCAPES = str.maketrans({
    '"': r'\"',
    '\\': r'\\',
    '\a': r'\a',
    '\n': SEGMENT_BREAK,
    '\r': None,
})


def escape(text: str, /) -> str:
    r"""Escape a string for use inside a quoted PO string literal.

    Quotes and backslashes are backslash-escaped, and the bell
    character is written as `\a`.  Carriage returns are dropped.  Each
    newline ends the current quoted segment and starts a new one on the
    next line.  If there is any newline at all, the result begins with
    an empty segment, so that the following lines align.

    The result does not include the outermost quotes.

    Args:
        text: The string to escape.

    Returns:
        The escaped string.

    Examples:
        >>> escape('say "hi"')
        'say \\"hi\\"'
        >>> escape('one\ntwo')
        '"\r\n"one"\r\n"two'

    """
    prefix = SEGMENT_BREAK if '\n' in text else ''
    return prefix + text.translate(_STRING_ESCAPES)


def escape_comment(text: str, comment_type: str = '', indent: int = 0) -> str:
    """Escape a possibly multi-line text for use in a PO comment.

    Args:
        text:
            The comment text.
        comment_type:
            The comment marker to continue with after each newline:
            `'.'` for extracted comments, `':'` for references, and
            `''` (or `'\\0'`) for translator comments.
        indent:
            The number of spaces to indent continuation lines by.

    Returns:
        The comment text with each newline followed by a comment
        marker.  Single-line text is returned unchanged.

    """
    marker = '' if comment_type == '\0' else comment_type
    return text.replace('\n', '\n#' + marker + ' ' * indent)


def resolve_culture(file_name: str | os.PathLike[str] | None, /) -> str:
    """Determine the culture of a resource file from its file name.

    Resource files named like `Strings.fr-FR.resx` carry their culture
    in the file name.  All other files are assumed to be in the default
    culture.

    Args:
        file_name: The resource file name, or `None`.

    Returns:
        The culture tag embedded in the file name, or `'en-US'` if
        there is none.

    """
    if not file_name:
        return DEFAULT_CULTURE
    match = _CULTURE_FROM_FILENAME.search(os.path.basename(file_name))
    return match.group(1) if match else DEFAULT_CULTURE


def get_user_identity() -> str | None:
    """Determine the name of the invoking user.

    Query the `LOGNAME`, `USER` and `USERNAME` environment variables, in
    that order.

    Returns:
        The user name, or `None` if none of the variables is set.

    """
    for env_var in ('LOGNAME', 'USER', 'USERNAME'):
        if os.environ.get(env_var):
            return os.environ[env_var]
    return None


def get_revision_time() -> datetime.datetime:
    """Determine the revision time to record in the PO header.

    Honors `SOURCE_DATE_EPOCH` for reproducible builds, and otherwise
    uses the current local time.

    Raises:
        RuntimeError:
            `SOURCE_DATE_EPOCH` is set, but is not an integer.

    """
    if os.environ.get('SOURCE_DATE_EPOCH'):
        try:
            source_date_epoch = int(os.environ['SOURCE_DATE_EPOCH'])
        except ValueError as exc:
            err_msg = 'Cannot parse SOURCE_DATE_EPOCH'
            raise RuntimeError(err_msg) from exc
        return datetime.datetime.fromtimestamp(
            source_date_epoch,
            tz=datetime.timezone.utc,
        )
    return datetime.datetime.now().astimezone()


class PoResourceWriter:
    """Write resource entries to a PO (or POT) file.

    The writer takes ownership of the binary output stream: the header
    is written immediately upon construction, every call to
    [`add_resource`][] appends one entry, and [`close`][] flushes and
    closes the stream.  Use the writer as a context manager to ensure
    that it is closed.

    Not thread safe.  Callers must serialize all calls themselves.

    Attributes:
        options:
            The writer options.
        is_template:
            If true, write a POT (template) file: all `msgstr` values
            are written as empty strings.
        newline:
            The line terminator.

    """

    logger: Final = logging.getLogger(PROG_NAME)
    newline: str = '\r\n'

    def __init__(
        self,
        stream: BinaryIO,
        options: WriterOptions | None = None,
        source_file: str | None = None,
        *,
        is_template: bool = False,
        identity: Callable[[], str | None] = get_user_identity,
        clock: Callable[[], datetime.datetime] = get_revision_time,
    ) -> None:
        """Initialize the writer, and write the PO header.

        Args:
            stream:
                A binary stream, opened for writing.
            options:
                The writer options.  Defaults to full comments, no
                format flags and no message context.
            source_file:
                The name of the file the entries are converted from.
                Recorded in the header, and used as the default source
                reference of each entry.
            is_template:
                If true, write a POT file instead of a PO file.
            identity:
                A function returning the name of the translator.
            clock:
                A function returning the revision time.

        """
        # A byte order mark confuses the gettext tools, so use plain
        # UTF-8 instead of UTF-8-SIG.
        self._stream = io.TextIOWrapper(stream, encoding='UTF-8', newline='')
        self.options = options if options is not None else WriterOptions()
        self.is_template = is_template
        self._source_file = source_file
        self._identity = identity
        self._clock = clock
        self._header_written = False
        # msgmerge misdetects the character encoding of PO files without
        # a header, so even an empty PO file needs one.
        self._write_header()

    @property
    def source_file(self) -> str | None:
        """The name of the file the entries are converted from."""
        return self._source_file

    @source_file.setter
    def source_file(self, value: str | None) -> None:
        self._source_file = value

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> Literal[False]:
        self.close()
        return False

    def _writeline(self, line: str = '') -> None:
        self._stream.write(line + self.newline)

    def _write_header(self) -> None:
        self._header_written = True
        self._writeline(f'# This file was generated by {PROG_NAME} {VERSION}')
        if self.source_file:
            self._writeline('#')
            self._writeline('# Converted to PO from:')
            self._writeline(f'#   {self.source_file}')
        self._writeline('#')
        # Marks the header as metadata, not as a translatable message.
        self._writeline('#, fuzzy')
        self._writeline('msgid ""')
        self._writeline('msgstr ""')
        translator = self._identity() or 'NAME'
        # Drop the domain name from the user name, if present.
        translator = translator.rpartition('\\')[2]
        culture = resolve_culture(self.source_file)
        po_info = {
            'MIME-Version': '1.0',
            'Content-Type': 'text/plain; charset=UTF-8',
            'Content-Transfer-Encoding': '8bit',
            'X-Generator': f'{PROG_NAME} {VERSION}',
            'Project-Id-Version': 'PACKAGE VERSION',
            'PO-Revision-Date': self._clock().strftime('%Y-%m-%d %H:%M%z'),
            'Last-Translator': f'{escape(translator)} <EMAIL@ADDRESS>',
            'Language': culture,
            'Language-Team': 'English',
            'Report-Msgid-Bugs-To': '',
            'Plural-Forms': 'nplurals=2; plural=(n != 1);',
        }
        for key, value in po_info.items():
            self._writeline(f'"{key}: {value}\\n"')
        self._writeline()
        self.logger.debug('Wrote PO header (language %s)', culture)

    def _write_comments(self, item: ResourceItem) -> None:
        original_message = item.original_value
        source_reference = item.original_source
        if self.options.comments == CommentOptions.FULL:
            # Keep the original message even if it equals the value, so
            # that the file can later be turned into a template without
            # losing information.
            if not original_message:
                original_message = item.value
            if not source_reference:
                source_reference = self.source_file
            if item.original_source_line > 0:
                source_reference = (
                    f'{source_reference}, ' if source_reference else ''
                ) + f'line {item.original_source_line}'
        else:
            source_reference = None

        if item.comment:
            self._writeline(f'#. {escape_comment(item.comment, ".")}')
            if original_message:
                self._writeline('#.')
        if original_message:
            escaped = escape_comment(original_message, '.', 4)
            if '\n' in original_message:
                self._writeline(
                    ORIGINAL_MESSAGE_COMMENT_PREFIX.rstrip()
                    + self.newline
                    + '#.    '
                    + escaped
                )
            else:
                self._writeline(ORIGINAL_MESSAGE_COMMENT_PREFIX + escaped)
        if source_reference:
            self._writeline(f'#: {escape_comment(source_reference, ".")}')
        if (
            self.options.format_flags
            and TranslationFlags.CSHARP_FORMAT_STRING in item.flags
        ):
            self._writeline('#, csharp-format')

    def add_resource(self, item: ResourceEntry, /) -> None:
        """Write a single entry.

        Args:
            item: The entry to write.

        Raises:
            OSError:
                Writing to the underlying stream failed.

        """
        if not self._header_written:  # pragma: no cover [failsafe]
            self._write_header()
        if self.options.comments != CommentOptions.NONE:
            match item:
                case PoItem():
                    self._stream.write(item.raw_po_comments)
                case ResourceItem():
                    self._write_comments(item)
                case _:  # pragma: no cover
                    assert_never(item)
        value = '' if self.is_template else escape(item.value)
        msgctxt = self.options.msgctxt
        if msgctxt and not msgctxt.isspace():
            self._writeline(f'msgctxt "{escape(msgctxt)}"')
        self._writeline(f'msgid "{escape(item.name)}"')
        self._writeline(f'msgstr "{value}"')
        self._writeline()
        self.logger.debug('Wrote entry %r', item.name)

    def add_resources(self, items: Iterable[ResourceEntry], /) -> int:
        """Write all entries, in order.

        Returns:
            The number of entries written.

        """
        count = 0
        for item in items:
            self.add_resource(item)
            count += 1
        return count

    def flush(self) -> None:
        """Flush all written entries to the underlying stream."""
        self._stream.flush()

    def close(self) -> None:
        """Flush and close the underlying stream.

        Calling this more than once has no further effect.

        """
        if not self._stream.closed:
            self._stream.close()
