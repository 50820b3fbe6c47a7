# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

from __future__ import annotations

import datetime
import io
import re
import sys
from typing import TYPE_CHECKING

import hypothesis
from typing_extensions import NamedTuple, Self

from resxpo import _types, po_writer

__all__ = ()

if TYPE_CHECKING:
    from collections.abc import Iterable

    import click.testing


FIXED_TIME = datetime.datetime(
    2025, 3, 1, 14, 5, tzinfo=datetime.timezone(datetime.timedelta(hours=1))
)
"""A fixed revision time, for reproducible headers."""
FIXED_TIME_FORMATTED = '2025-03-01 14:05+0100'
"""[`FIXED_TIME`][], formatted as in the PO header."""
FIXED_TRANSLATOR = 'jdoe'
"""A fixed translator name, for reproducible headers."""

SAMPLE_RESX = b"""\
<?xml version="1.0" encoding="utf-8"?>
<root>
  <resheader name="resmimetype">
    <value>text/microsoft-resx</value>
  </resheader>
  <resheader name="version">
    <value>2.0</value>
  </resheader>
  <data name="Greeting" xml:space="preserve">
    <value>Hello</value>
  </data>
  <data name="Farewell" xml:space="preserve">
    <value>Goodbye, {0}!</value>
    <comment>Shown when the user logs out.</comment>
  </data>
  <data name="Icon" type="System.Resources.ResXFileRef, System.Windows.Forms">
    <value>icon.ico;System.Drawing.Icon, System.Drawing</value>
  </data>
  <data name="Logo" mimetype="application/x-microsoft.net.object.bytearray.base64">
    <value>AAAA</value>
  </data>
  <data name="Empty" xml:space="preserve">
    <value />
  </data>
</root>
"""
"""A small .resx file with two string resources, two non-string
resources and one empty string resource."""

hypothesis_settings_coverage_compatible = (
    hypothesis.settings(
        # Running under coverage with the Python tracer increases
        # running times 40-fold, on my machines.  Sadly, not every
        # Python version offers the C tracer, so sometimes the Python
        # tracer is used anyway.
        deadline=(
            40 * deadline
            if (deadline := hypothesis.settings().deadline) is not None
            else None
        ),
        suppress_health_check=(hypothesis.HealthCheck.too_slow,),
    )
    if sys.gettrace() is not None
    else hypothesis.settings()
)


def po_join(escaped: str, /) -> str:
    """Reassemble an escaped PO string literal into its value.

    Drops the leading alignment segment, maps each segment break back
    to a newline, and undoes the backslash escapes.  This is the inverse
    of [`po_writer.escape`][resxpo.po_writer.escape], up to dropped
    carriage returns.

    """
    escaped = escaped.removeprefix(po_writer.SEGMENT_BREAK)
    joined = escaped.replace(po_writer.SEGMENT_BREAK, '\n')
    return re.sub(
        r'\\(.)',
        lambda m: '\a' if m.group(1) == 'a' else m.group(1),
        joined,
        flags=re.DOTALL,
    )


def write_po(
    items: Iterable[_types.ResourceEntry] = (),
    options: _types.WriterOptions | None = None,
    source_file: str | None = None,
    *,
    is_template: bool = False,
    translator: str | None = FIXED_TRANSLATOR,
) -> str:
    """Write a PO file in memory, and return its (decoded) contents."""
    buffer = io.BytesIO()
    with po_writer.PoResourceWriter(
        buffer,
        options,
        source_file,
        is_template=is_template,
        identity=lambda: translator,
        clock=lambda: FIXED_TIME,
    ) as writer:
        writer.add_resources(items)
        writer.flush()
        return buffer.getvalue().decode('UTF-8')


def split_blocks(contents: str, /) -> list[str]:
    """Split PO file contents into the header and the entry blocks."""
    return [block for block in contents.split('\r\n\r\n') if block]


def expected_header(
    source_file: str | None = None,
    *,
    language: str = 'en-US',
    translator: str = FIXED_TRANSLATOR,
) -> str:
    """Return the expected PO header for [`write_po`][]."""
    lines = [f'# This file was generated by resxpo {po_writer.VERSION}']
    if source_file:
        lines.extend(['#', '# Converted to PO from:', f'#   {source_file}'])
    lines.extend([
        '#',
        '#, fuzzy',
        'msgid ""',
        'msgstr ""',
        r'"MIME-Version: 1.0\n"',
        r'"Content-Type: text/plain; charset=UTF-8\n"',
        r'"Content-Transfer-Encoding: 8bit\n"',
        rf'"X-Generator: resxpo {po_writer.VERSION}\n"',
        r'"Project-Id-Version: PACKAGE VERSION\n"',
        rf'"PO-Revision-Date: {FIXED_TIME_FORMATTED}\n"',
        rf'"Last-Translator: {translator} <EMAIL@ADDRESS>\n"',
        rf'"Language: {language}\n"',
        r'"Language-Team: English\n"',
        r'"Report-Msgid-Bugs-To: \n"',
        r'"Plural-Forms: nplurals=2; plural=(n != 1);\n"',
        '',
        '',
    ])
    return '\r\n'.join(lines)


class ReadableResult(NamedTuple):
    """Helper class for formatting and testing click.testing.Result objects."""

    exception: BaseException | None
    exit_code: int
    stdout: bytes
    stderr: str

    @classmethod
    def parse(cls, r: click.testing.Result, /) -> Self:
        return cls(r.exception, r.exit_code, r.stdout_bytes, r.stderr or '')

    def clean_exit(self, *, empty_stderr: bool = False) -> bool:
        """Return whether the invocation exited cleanly."""
        return (
            (
                not self.exception
                or (
                    isinstance(self.exception, SystemExit)
                    and self.exit_code == 0
                )
            )
            and (not empty_stderr or not self.stderr)
        )

    def error_exit(self) -> bool:
        """Return whether the invocation exited uncleanly."""
        return isinstance(self.exception, SystemExit) and self.exit_code > 0
