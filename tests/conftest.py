import pytest

from factories import build_tokens

from keytone.catalog import TokenCatalog


@pytest.fixture(scope="session")
def tokens():
    return build_tokens()


@pytest.fixture(scope="session")
def catalog(tokens):
    return TokenCatalog(tokens)
