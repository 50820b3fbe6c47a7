# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""Reader for .NET `.resx` resource files."""

from __future__ import annotations

import logging
import os
import re
from typing import TYPE_CHECKING
from xml.etree import ElementTree

from resxpo import _internals
from resxpo._types import ResourceItem, TranslationFlags

if TYPE_CHECKING:
    from typing import BinaryIO

__all__ = ('NotAResxFileError', 'detect_flags', 'read_resx')

PROG_NAME = _internals.PROG_NAME

# {index[,alignment][:formatString]}, but not the escaped "{{".
_COMPOSITE_FORMAT_ITEM = re.compile(
    r'(?<!\{)\{\d+(?:\s*,\s*-?\d+)?(?::[^{}]*)?\}'
)


class NotAResxFileError(ValueError):
    """The `path` does not hold a `.resx` resource document."""

    def __init__(
        self,
        path: str | bytes | os.PathLike | None,
        reason: str | None = None,
    ) -> None:
        self.path = os.fsdecode(path) if path is not None else None
        self.reason = reason

    def __str__(self) -> str:  # pragma: no cover
        name = repr(self.path) if self.path is not None else '<stream>'
        return (
            f'Not a resx file: {name}: {self.reason}'
            if self.reason
            else f'Not a resx file: {name}'
        )


def detect_flags(value: str, /) -> TranslationFlags:
    """Determine the translation flags of a resource value.

    Returns:
        [`TranslationFlags.CSHARP_FORMAT_STRING`][] if the value
        contains a composite format item such as `{0}` or `{1:N2}`,
        otherwise no flags.

    """
    if _COMPOSITE_FORMAT_ITEM.search(value):
        return TranslationFlags.CSHARP_FORMAT_STRING
    return TranslationFlags.NONE


def read_resx(
    source: str | bytes | os.PathLike | BinaryIO,
    /,
) -> list[ResourceItem]:
    """Read all string resources from a `.resx` file.

    Non-string resources (those declaring a `type` or a `mimetype`) are
    skipped.

    Args:
        source:
            A path to the `.resx` file, or a binary file object.

    Returns:
        The string resources, in document order.

    Raises:
        NotAResxFileError:
            The file is not well-formed XML, or its document element is
            not `<root>`.
        OSError:
            The file cannot be read.

    """
    logger = logging.getLogger(PROG_NAME)
    path = source if isinstance(source, (str, bytes, os.PathLike)) else None
    try:
        tree = ElementTree.parse(source)  # noqa: S314
    except ElementTree.ParseError as exc:
        raise NotAResxFileError(path, str(exc)) from exc
    root = tree.getroot()
    if root.tag != 'root':
        raise NotAResxFileError(path, f'unexpected root element {root.tag!r}')
    items: list[ResourceItem] = []
    for data in root.iter('data'):
        name = data.get('name')
        if name is None:
            logger.debug('Skipping unnamed resource')
            continue
        if data.get('type') is not None or data.get('mimetype') is not None:
            logger.debug('Skipping non-string resource %r', name)
            continue
        value = data.findtext('value')
        if value is None:
            logger.debug('Skipping resource %r without a value', name)
            continue
        comment = data.findtext('comment') or None
        items.append(
            ResourceItem(
                name=name,
                value=value,
                comment=comment,
                flags=detect_flags(value),
            )
        )
    return items
