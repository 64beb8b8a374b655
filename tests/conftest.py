"""
Test Configuration
==================

Pytest configuration with shared fixtures: testing settings, sample DSL
sources and parsed documents.
"""

import pytest
from pathlib import Path
from typing import Generator

from braceml.config import settings as settings_module
from braceml.config.settings import Settings
from braceml.core.dsl.parser import parse_document
from braceml.models.schemas import Document, FormatOptions

from tests.utils.data_generators import DSLDataGenerator


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    __test__ = False

    environment: str = "testing"
    debug: bool = False
    log_level: str = "WARNING"


@pytest.fixture(scope="session")
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings(_env_file=None)


@pytest.fixture(autouse=True)
def override_settings(test_settings: TestSettings) -> Generator[TestSettings, None, None]:
    """Install the testing settings as the global settings instance."""
    previous = settings_module.settings
    settings_module.settings = test_settings
    yield test_settings
    settings_module.settings = previous


@pytest.fixture
def sample_dsl() -> str:
    """Sample DSL document exercising id, classes, attributes and nesting."""
    return DSLDataGenerator.generate_landing_page()


@pytest.fixture
def sample_document(sample_dsl: str) -> Document:
    """Parsed sample document."""
    return parse_document(sample_dsl)


@pytest.fixture
def format_options() -> FormatOptions:
    """Default formatting options."""
    return FormatOptions()


@pytest.fixture
def dsl_file(tmp_path: Path, sample_dsl: str) -> Path:
    """Sample DSL document written to a file."""
    path = tmp_path / "page.bml"
    path.write_text(sample_dsl, encoding="utf-8")
    return path
