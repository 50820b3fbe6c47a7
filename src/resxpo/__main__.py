# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib
"""Run [`resxpo.cli.resxpo`][] on import."""

import sys

if __name__ == '__main__':
    from resxpo.cli import resxpo

    sys.exit(resxpo())
