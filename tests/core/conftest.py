import pytest

from atomwriter.core.config import AtomWriterConfig, AuthorSettings


@pytest.fixture
def author_settings() -> AuthorSettings:
    return AuthorSettings(name="Default Person", email="default@example.org")


@pytest.fixture
def config(author_settings: AuthorSettings) -> AtomWriterConfig:
    """A config that never looks at the environment or the login user."""
    return AtomWriterConfig(author=author_settings)
