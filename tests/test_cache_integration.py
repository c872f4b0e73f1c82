import asyncio

import pytest

from timed_cacheable import (
    AsyncCacheInterceptorFactory,
    CacheType,
    Directive,
    PropertySource,
    RedisClientConfig,
    RefreshCoordinator,
    TimedCacheableClass,
    TimeUnit,
    ValkeyClientConfig,
)


def cache_properties(cache_type: CacheType) -> PropertySource:
    return PropertySource.from_properties(
        {
            "cache.default.ttl": "1",
            "cache.default.timeUnit": "s",
            "cache.default.cacheType": cache_type.name,
            "cache.longLived.ttl": "5",
            "cache.longLived.timeUnit": "m",
            "cache.longLived.cacheType": cache_type.name,
            "cache.disabled.ttl": "-1",
            "cache.disabled.timeUnit": "m",
            "cache.disabled.cacheType": cache_type.name,
        }
    )


class Backend:
    def __init__(self, interceptor, cache_type: CacheType):
        self.interceptor = interceptor
        self.cache_type = cache_type

    def cacheable(self, cache_name, ttl=None, key=""):
        return self.interceptor(
            Directive(cache_name, ttl or "${cache.%s}" % cache_name, key=key, cache_type=self.cache_type)
        )


class BaseTestConfig:
    @pytest.fixture
    async def inmemory_backend(self):
        interceptor = await AsyncCacheInterceptorFactory.inmemory(cache_properties(CacheType.REDIS))
        return Backend(interceptor, CacheType.REDIS)

    @pytest.fixture
    async def redis_backend(self):
        pytest.importorskip("redis")
        try:
            interceptor = await AsyncCacheInterceptorFactory.redis(
                RedisClientConfig.localhost(), cache_properties(CacheType.REDIS)
            )
            store = interceptor.stores[CacheType.REDIS]
            await store.ping()
            await store.clear()
        except Exception:
            pytest.skip("Redis server not available")
        yield Backend(interceptor, CacheType.REDIS)
        await store.close()

    @pytest.fixture
    async def valkey_backend(self):
        pytest.importorskip("glide")
        try:
            interceptor = await AsyncCacheInterceptorFactory.valkey(
                ValkeyClientConfig.localhost(), cache_properties(CacheType.VALKEY)
            )
            store = interceptor.stores[CacheType.VALKEY]
            await store.clear()
        except Exception:
            pytest.skip("Valkey server not available")
        yield Backend(interceptor, CacheType.VALKEY)
        await store.close()

    @pytest.fixture(params=["inmemory_backend", "redis_backend", "valkey_backend"])
    def backend(self, request):
        return request.getfixturevalue(request.param)


class TestBasicCacheOperations(BaseTestConfig):
    @pytest.mark.asyncio
    async def test_real_cache_integration(self, backend):
        call_count = 0

        @backend.cacheable("shortLived")
        async def test_func():
            nonlocal call_count
            call_count += 1
            return f"Call {call_count}"

        assert await test_func() == "Call 1"
        assert await test_func() == "Call 1"
        assert call_count == 1

        await asyncio.sleep(1.1)

        assert await test_func() == "Call 2"
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_literal_ttl_uses_minutes(self, backend):
        call_count = 0

        @backend.cacheable("literal", ttl="1")
        async def test_func():
            nonlocal call_count
            call_count += 1
            return f"Call {call_count}"

        await test_func()
        await asyncio.sleep(1.1)
        assert await test_func() == "Call 1"
        assert backend.interceptor.registry.get("literal").time_unit is TimeUnit.MINUTES

    @pytest.mark.asyncio
    async def test_disabled_cache_always_calls(self, backend):
        call_count = 0

        @backend.cacheable("disabled")
        async def test_func():
            nonlocal call_count
            call_count += 1
            return call_count

        assert await test_func() == 1
        assert await test_func() == 2

    @pytest.mark.asyncio
    async def test_cache_with_complex_objects(self, backend):
        call_count = 0

        @backend.cacheable("longLived")
        async def process_data(data_dict, data_list):
            nonlocal call_count
            call_count += 1
            return {"sizes": (len(data_dict), len(data_list)), "call": call_count}

        assert await process_data({"a": 1, "b": 2}, [1, 2, 3]) == {"sizes": (2, 3), "call": 1}
        assert await process_data({"a": 1, "b": 2}, [1, 2, 3]) == {"sizes": (2, 3), "call": 1}
        assert await process_data({"c": 3}, [4, 5]) == {"sizes": (1, 2), "call": 2}


class TestRefreshIntegration(BaseTestConfig):
    @pytest.mark.asyncio
    async def test_refresh_changes_ttl_of_later_writes(self, backend):
        config = backend.interceptor.resolver.config
        call_count = 0

        @backend.cacheable("longLived", key="{item_id}")
        async def get_item(item_id):
            nonlocal call_count
            call_count += 1
            return f"{item_id}_{call_count}"

        await get_item(1)
        await asyncio.sleep(1.1)
        assert await get_item(1) == "1_1"

        config.replace(
            {"cache": {"longLived": {"ttl": "1", "timeUnit": "s", "cacheType": backend.cache_type.name}}}
        )
        assert RefreshCoordinator(config, backend.interceptor.registry).refresh() == {}

        assert await get_item(2) == "2_2"
        await asyncio.sleep(1.1)
        assert await get_item(2) == "2_3"


class TestEdgeCases(BaseTestConfig):
    @pytest.mark.asyncio
    async def test_none_result_not_cached(self, backend):
        call_count = 0

        @backend.cacheable("longLived")
        async def test_func():
            nonlocal call_count
            call_count += 1
            return None

        assert await test_func() is None
        assert await test_func() is None
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_exception_handling(self, backend):
        call_count = 0

        @backend.cacheable("longLived")
        async def failing_func(should_fail):
            nonlocal call_count
            call_count += 1
            if should_fail:
                raise ValueError("Test error")
            return "Success"

        with pytest.raises(ValueError, match="Test error"):
            await failing_func(True)
        with pytest.raises(ValueError, match="Test error"):
            await failing_func(True)
        assert call_count == 2

        assert await failing_func(False) == "Success"
        assert await failing_func(False) == "Success"
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_cache_names_do_not_collide(self, backend):
        @backend.cacheable("longLived", key="{item_id}")
        async def first(item_id):
            return "first"

        @backend.cacheable("shortLived", key="{item_id}")
        async def second(item_id):
            return "second"

        assert await first(1) == "first"
        assert await second(1) == "second"
        assert await first(1) == "first"


class TestConcurrentAccess(BaseTestConfig):
    @pytest.mark.asyncio
    async def test_concurrent_cache_access(self, backend):
        @backend.cacheable("longLived", key="{item_id}")
        async def slow_func(item_id):
            await asyncio.sleep(0.05)
            return f"item_{item_id}"

        results = await asyncio.gather(*(slow_func(i % 3) for i in range(9)))
        assert results == [f"item_{i % 3}" for i in range(9)]


class TestCacheableService(BaseTestConfig):
    @pytest.mark.asyncio
    async def test_service_methods(self, inmemory_backend):
        class PostService(TimedCacheableClass):
            def __init__(self, cache_interceptor):
                super().__init__(cache_interceptor)
                self.load_count = 0

            @TimedCacheableClass.cache("longLived", ttl="${cache.longLived}", key="{post_id}")
            async def get_post(self, post_id):
                self.load_count += 1
                return {"id": post_id}

            @TimedCacheableClass.evict("longLived", key="{post_id}")
            async def delete_post(self, post_id):
                return True

        service = PostService(inmemory_backend.interceptor)
        await service.get_post(1)
        await service.get_post(1)
        assert service.load_count == 1

        await service.delete_post(1)
        await service.get_post(1)
        assert service.load_count == 2
