# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""Types used by resxpo."""

from __future__ import annotations

import enum
from typing import Union

from typing_extensions import NamedTuple, TypeAlias

__all__ = (
    'CommentOptions',
    'PoItem',
    'ResourceEntry',
    'ResourceItem',
    'TranslationFlags',
    'WriterOptions',
)


class TranslationFlags(enum.Flag):
    """Translation flags attached to a resource entry.

    Attributes:
        NONE:
            No flags.
        CSHARP_FORMAT_STRING:
            The value is a .NET composite format string (`{0}`,
            `{1:N2}`, ...).  Emitted as the `csharp-format` flag so
            that gettext tooling checks the placeholders.

    """

    NONE = 0
    """"""
    CSHARP_FORMAT_STRING = enum.auto()
    """"""


class CommentOptions(str, enum.Enum):
    """Which comments to write to the destination file.

    Attributes:
        FULL:
            Write the comments that existed in the source file, and
            additionally any comments we can generate automatically
            (original message, source file reference).
        SOURCE_ONLY:
            Only write the comments that existed in the source file.
            Do not write automatically generated source references.
        NONE:
            Write no comments at all, neither from the source file nor
            generated ones.

    """

    FULL = 'full'
    """"""
    SOURCE_ONLY = 'source-only'
    """"""
    NONE = 'none'
    """"""


class ResourceItem(NamedTuple):
    """A localizable resource entry, plus its translation metadata.

    Attributes:
        name:
            The resource name.  Written as the `msgid`.
        value:
            The resource value.  Written as the `msgstr`.
        original_value:
            The untranslated value, if this entry is a translation.
        original_source:
            The file the entry originally came from, if known.
        original_source_line:
            The line within `original_source`, or 0 if unknown.
        comment:
            A free-form comment from the source file.
        flags:
            Translation flags.

    """

    name: str
    """"""
    value: str
    """"""
    original_value: str | None = None
    """"""
    original_source: str | None = None
    """"""
    original_source_line: int = 0
    """"""
    comment: str | None = None
    """"""
    flags: TranslationFlags = TranslationFlags.NONE
    """"""


class PoItem(NamedTuple):
    """A resource entry read back from a previously written PO file.

    Attributes:
        name:
            The resource name.
        value:
            The resource value.
        raw_po_comments:
            The entry's comment block, verbatim, including the `#`
            markers and line terminators.  Written back unchanged
            instead of regenerating comments.

    """

    name: str
    """"""
    value: str
    """"""
    raw_po_comments: str = ''
    """"""


ResourceEntry: TypeAlias = Union[ResourceItem, PoItem]
"""Any entry the PO writer accepts."""


class WriterOptions(NamedTuple):
    """Options for the PO writer.

    Attributes:
        comments:
            Which comments to write.
        format_flags:
            If true, write the `csharp-format` flag for entries marked
            as format strings.
        msgctxt:
            A message context to write for every entry.  Ignored if
            empty or whitespace-only.

    """

    comments: CommentOptions = CommentOptions.FULL
    """"""
    format_flags: bool = False
    """"""
    msgctxt: str | None = None
    """"""
