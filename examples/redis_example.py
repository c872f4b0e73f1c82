import asyncio
import os

from timed_cacheable import (
    AsyncCacheInterceptorFactory,
    PropertySource,
    RedisClientConfig,
    TimedCacheableClass,
)


class ProductService(TimedCacheableClass):
    def __init__(self, cache_interceptor):
        super().__init__(cache_interceptor)

        # Simulate product database
        self.products = {
            1: {"id": 1, "name": "Laptop", "price": 999.99, "stock": 10},
            2: {"id": 2, "name": "Mouse", "price": 29.99, "stock": 100},
            3: {"id": 3, "name": "Keyboard", "price": 79.99, "stock": 50},
        }

    @TimedCacheableClass.cache("getProduct", ttl="${cache.getProduct}", key="{product_id}")
    async def get_product(self, product_id: int):
        print(f"Fetching product {product_id} from database...")
        await asyncio.sleep(0.5)  # Simulate DB query
        return self.products.get(product_id)

    @TimedCacheableClass.cache("searchProducts", ttl="${cache.searchProducts}", key="{keyword}")
    async def search_products(self, keyword: str):
        print(f"Searching products with keyword: {keyword}")
        await asyncio.sleep(1)
        return [product for product in self.products.values() if keyword.lower() in str(product["name"]).lower()]

    @TimedCacheableClass.evict("getProduct", key="{product_id}")
    async def update_stock(self, product_id: int, new_stock: int):
        print(f"Updating stock for product {product_id} to {new_stock}")
        if product_id in self.products:
            self.products[product_id]["stock"] = new_stock
            return self.products[product_id]
        return None


async def main():
    redis_config = RedisClientConfig.from_section(
        {
            "host": os.getenv("REDIS_HOST", "localhost"),
            "port": os.getenv("REDIS_PORT", "6379"),
            "password": os.getenv("REDIS_PASSWORD"),
        }
    )
    config = PropertySource.from_properties(
        {
            "cache.default.ttl": "1",
            "cache.default.timeUnit": "h",
            "cache.getProduct.ttl": "5",
            "cache.getProduct.timeUnit": "m",
        }
    )
    interceptor = await AsyncCacheInterceptorFactory.redis(redis_config, config)
    service = ProductService(interceptor)

    try:
        print("=== Redis Cache Example ===")
        print(f"Product: {await service.get_product(1)}")
        print(f"Product (cached): {await service.get_product(1)}")
        print(f"Search: {await service.search_products('o')}")

        await service.update_stock(1, 5)
        print(f"Product after update: {await service.get_product(1)}")
    finally:
        for store in interceptor.stores.values():
            await store.close()


if __name__ == "__main__":
    asyncio.run(main())
