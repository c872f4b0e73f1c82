"""
Dependency Injection Example with timed-cacheable

Wires the caching core through CacheContainer and reloads TTL policies
at runtime through the RefreshCoordinator.
"""

import asyncio

from dependency_injector import containers, providers

from timed_cacheable import CacheType, InMemoryCache, TimedCacheableClass
from timed_cacheable.containers import CacheContainer


class NewsService(TimedCacheableClass):
    """Service for fetching news with caching support."""

    def __init__(self, cache_interceptor):
        super().__init__(cache_interceptor)
        self._api_calls = 0

    @TimedCacheableClass.cache("getHeadlines", ttl="${cache.getHeadlines}", key="{category}")
    async def get_headlines(self, category: str = "general") -> list:
        self._api_calls += 1
        print(f"[API] Fetching {category} headlines (API call #{self._api_calls})")
        await asyncio.sleep(0.1)
        return [{"title": f"{category.title()} News {i}", "url": f"https://news.com/{i}"} for i in range(1, 6)]


class Container(containers.DeclarativeContainer):
    cache = providers.Container(CacheContainer)

    news_service = providers.Factory(NewsService, cache_interceptor=cache.interceptor)


async def development_demo():
    container = Container()
    container.cache.config.from_dict(
        {"cache": {"default": {"ttl": "5", "timeUnit": "m"}, "getHeadlines": {"ttl": "1", "timeUnit": "m"}}}
    )
    container.cache.stores.override(providers.Object({CacheType.REDIS: InMemoryCache()}))

    service = container.news_service()
    await service.get_headlines("technology")
    await service.get_headlines("technology")
    print(f"Policies: {container.cache.registry().snapshot()}")

    # Configuration reload, e.g. triggered by a file watcher or an admin endpoint
    container.cache.config.from_dict({"cache": {"getHeadlines": {"ttl": "-1"}}})
    container.cache.refresh_coordinator().on_refresh()
    await service.get_headlines("technology")
    print(f"Policies after refresh: {container.cache.registry().snapshot()}")


async def production_demo():
    container = Container()
    container.cache.config.from_dict(
        {
            "cache": {"default": {"ttl": "1", "timeUnit": "h"}},
            "redis": {"host": "localhost", "port": 6379, "db": 0},
        }
    )
    service = container.news_service()
    await service.get_headlines("technology")
    await container.cache.redis_cache().close()


if __name__ == "__main__":
    asyncio.run(development_demo())

    # Uncomment to run with Redis
    # asyncio.run(production_demo())
