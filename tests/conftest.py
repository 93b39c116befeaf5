"""Shared fixtures."""

import logging
from types import SimpleNamespace

import pytest
from sanic import Sanic

from willow.support import Config

Sanic.test_mode = True


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    Config.clear()
    monkeypatch.delenv("WILLOW_MODE", raising=False)
    yield
    Config.clear()


@pytest.fixture(autouse=True)
def reset_willow_logger():
    yield
    logger = logging.getLogger("willow")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def make_request(headers=None, method="GET", path="/", match_info=None, args=None):
    """Minimal stand-in for a Sanic request."""
    return SimpleNamespace(
        headers=headers or {},
        method=method,
        path=path,
        ctx=SimpleNamespace(),
        match_info=match_info or {},
        args=args or {},
        form={},
        body=b"",
    )


@pytest.fixture
def fake_request():
    return make_request
