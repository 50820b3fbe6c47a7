# SPDX-FileCopyrightText: 2025 Marco Ricci <software@the13thletter.info>
#
# SPDX-License-Identifier: Zlib

from __future__ import annotations

import datetime
import logging
from typing import TYPE_CHECKING

import hypothesis
import pytest

import tests
from resxpo._internals import cli_machinery

if TYPE_CHECKING:
    import pathlib
    from collections.abc import Iterator

# https://hypothesis.readthedocs.io/en/latest/settings.html#settings-profiles
hypothesis.settings.register_profile('ci', max_examples=1000)
hypothesis.settings.register_profile('dev', max_examples=10)
hypothesis.settings.register_profile(
    'debug', max_examples=10, verbosity=hypothesis.Verbosity.verbose
)
hypothesis.settings.register_profile(
    'flaky', deadline=datetime.timedelta(milliseconds=150)
)


@pytest.fixture(autouse=True)
def reset_logging_levels() -> Iterator[None]:
    """Undo logging level changes made by the `--debug` etc. options."""
    logger = logging.getLogger(cli_machinery.StandardCLILogging.package_name)
    handler = cli_machinery.StandardCLILogging.cli_handler
    saved = (logger.level, handler.level)
    yield
    logger.setLevel(saved[0])
    handler.setLevel(saved[1])


@pytest.fixture
def reproducible_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin the translator name and the revision time via the environment."""
    monkeypatch.setenv('LOGNAME', tests.FIXED_TRANSLATOR)
    monkeypatch.setenv(
        'SOURCE_DATE_EPOCH', str(int(tests.FIXED_TIME.timestamp()))
    )


@pytest.fixture
def sample_resx(tmp_path: pathlib.Path) -> pathlib.Path:
    """Write the sample `.resx` file to a temporary directory."""
    path = tmp_path / 'Strings.fr-FR.resx'
    path.write_bytes(tests.SAMPLE_RESX)
    return path
