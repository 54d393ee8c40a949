import pytest

from src.modules.cache.service import CacheService, MemoryCacheBackend


@pytest.fixture
def article():
    return {
        "id": 1,
        "code": "CMS-123",
        "title": "New Listing",
        "type": 1,
        "releaseDate": 1700000000000,
    }


@pytest.fixture
def cache():
    return CacheService(MemoryCacheBackend())
