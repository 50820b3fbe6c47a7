# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

"""Convert .resx resource files to gettext PO and POT files."""

__author__ = 'Marco Ricci <software@the13thletter.info>'
__distribution_name__ = 'resxpo'

# Automatically generated.  DO NOT EDIT! Use importlib.metadata instead
# to query the correct values.
__version__ = '0.1.0'
# END automatically generated.
