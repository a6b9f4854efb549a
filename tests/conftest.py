"""Fixtures for phptokenizer tests."""

import pytest

from phptokenizer.ast_analysis import PhpParser, StructureAnalyzer
from phptokenizer.services.configuration_service import ENV_PREFIX, reset_config_service


@pytest.fixture(scope="session")
def parser():
    """Create a PhpParser instance."""
    return PhpParser()


@pytest.fixture
def analyzer(parser):
    """Create a StructureAnalyzer using the shared parser."""
    return StructureAnalyzer(parser)


@pytest.fixture
def kinds_of(analyzer):
    """Return a helper giving the token kind names of a PHP snippet."""
    def _kinds(source):
        return [token.kind.name for token in analyzer.analyze_code(source).tokens]
    return _kinds


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Isolate every test from configuration set elsewhere."""
    import os
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)
    reset_config_service()
    yield
    reset_config_service()
