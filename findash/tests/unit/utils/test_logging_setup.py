from __future__ import annotations

import logging

import pytest

from findash.utils.logging import configure_root


@pytest.fixture(autouse=True)
def _restore_levels():
    names = ("", "httpx", "httpcore")
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


@pytest.mark.parametrize(
    "env, expected",
    [
        ({}, logging.INFO),
        ({"FINDASH_LOG_LEVEL": "warning"}, logging.WARNING),
        ({"FINDASH_LOG_LEVEL": "15"}, 15),
        ({"FINDASH_LOG_LEVEL": "bogus"}, logging.INFO),
        ({"FINDASH_DEBUG": "yes"}, logging.DEBUG),
        ({"FINDASH_LOG_LEVEL": "ERROR", "FINDASH_DEBUG": "1"}, logging.ERROR),
    ],
)
def test_configure_root_reads_level_from_env(env, expected) -> None:
    assert configure_root(environ=env) == expected
    assert logging.getLogger().level == expected


def test_http_loggers_quiet_unless_debugging() -> None:
    configure_root(environ={})
    assert logging.getLogger("httpx").level == logging.WARNING

    configure_root(environ={"FINDASH_DEBUG": "1"})
    assert logging.getLogger("httpcore").level == logging.NOTSET
