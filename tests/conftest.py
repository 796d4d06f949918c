"""
Pytest configuration and shared fixtures for catplants tests.

Provides:
- Sample plant list page and a fixed run timestamp
- Pipeline and assembled dataset
- In-memory test database, empty or loaded with the sample dataset
- Fetcher without on-disk cache
"""

import pytest
from typing import Generator
from sqlalchemy.orm import Session

from catplants.bootstrap.plant_list import PlantListFetcher
from catplants.database.connection import DatabaseManager
from catplants.database.crud import load_dataset
from catplants.normalization.html_text import HtmlTextNormalizer
from catplants.pipeline import PlantListPipeline
from catplants.utils.config_manager import ConfigManager
from tests.fixtures.test_data import FIXED_RUN_TIME, SAMPLE_PAGE_HTML


# ============================================================================
# PIPELINE FIXTURES
# ============================================================================

@pytest.fixture
def sample_html() -> str:
    """Trimmed copy of the plant list page."""
    return SAMPLE_PAGE_HTML


@pytest.fixture
def run_time():
    """Fixed run timestamp."""
    return FIXED_RUN_TIME


@pytest.fixture
def html_normalizer() -> HtmlTextNormalizer:
    """Create HtmlTextNormalizer instance."""
    return HtmlTextNormalizer()


@pytest.fixture
def default_config():
    """Default configuration dictionary."""
    return ConfigManager().get_all_config()


@pytest.fixture
def pipeline(default_config) -> PlantListPipeline:
    """Create a pipeline with default configuration."""
    return PlantListPipeline(default_config)


@pytest.fixture
def dataset(pipeline, sample_html, run_time):
    """Dataset assembled from the sample page."""
    return pipeline.build_dataset(sample_html, run_time)


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def db_manager() -> Generator[DatabaseManager, None, None]:
    """Fresh in-memory database for each test."""
    manager = DatabaseManager(db_path=":memory:")
    manager.create_all_tables()
    yield manager
    manager.close()


@pytest.fixture(scope="function")
def test_db_session(db_manager) -> Generator[Session, None, None]:
    """Session on an empty in-memory database."""
    session = db_manager.get_session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture(scope="function")
def loaded_db_session(test_db_session, dataset) -> Session:
    """Session on a database loaded with the sample dataset."""
    load_dataset(test_db_session, dataset)
    test_db_session.commit()
    return test_db_session


# ============================================================================
# FETCHER FIXTURES
# ============================================================================

@pytest.fixture
def fetcher() -> Generator[PlantListFetcher, None, None]:
    """Fetcher with caching disabled."""
    instance = PlantListFetcher(use_cache=False, max_retries=2)
    yield instance
    instance.close()
