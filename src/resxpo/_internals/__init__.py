# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""resxpo internals.

Warning:
    Non-public package (implementation detail), provided for didactical
    and educational purposes only. Subject to change without notice,
    including removal.

"""

import resxpo

__all__ = ()

PROG_NAME = resxpo.__distribution_name__
VERSION = resxpo.__version__
AUTHOR = resxpo.__author__
