from __future__ import annotations

import pytest

from forge_fixtures import ACCOUNT_URL, FakeForge, FakeRepositoryFactory
from glit.config import PipelineSettings, UserConfig


@pytest.fixture
def user_config() -> UserConfig:
    return UserConfig(url=ACCOUNT_URL)


@pytest.fixture
def small_settings() -> PipelineSettings:
    return PipelineSettings(page_size=3, max_concurrent_pages=2)


@pytest.fixture
def forge() -> FakeForge:
    return FakeForge([f"repo-{i:02d}" for i in range(8)], page_size=3)


@pytest.fixture
def repository_factory() -> FakeRepositoryFactory:
    return FakeRepositoryFactory()
