import asyncio
import logging

from timed_cacheable import AsyncCacheInterceptorFactory, PropertySource, RefreshCoordinator, TimedCacheableClass


class WeatherService(TimedCacheableClass):
    @TimedCacheableClass.cache("getWeather", ttl="${cache.getWeather}", key="{city}")
    async def get_weather(self, city: str):
        print(f"Fetching weather for {city}...")
        # Simulate API call
        await asyncio.sleep(1)
        return {"city": city, "temp": 25, "condition": "Sunny"}

    @TimedCacheableClass.cache("getForecast", ttl="${cache.getForecast}", key="{city}:{days}")
    async def get_forecast(self, city: str, days: int = 7):
        print(f"Fetching {days}-day forecast for {city}...")
        await asyncio.sleep(1)
        return {"city": city, "days": days, "forecast": [{"day": i, "temp": 20 + i} for i in range(days)]}

    @TimedCacheableClass.cache("getAlerts", ttl=10, time_unit="s")
    async def get_alerts(self, city: str):
        print(f"Fetching alerts for {city}...")
        return [f"{city}: no alerts"]


async def main():
    logging.basicConfig(level=logging.INFO)

    config = PropertySource.from_properties(
        {
            "cache.default.ttl": "5",
            "cache.default.timeUnit": "m",
            "cache.getWeather.ttl": "1",
            "cache.getWeather.timeUnit": "m",
            "cache.getForecast.ttl": "3",
            "cache.getForecast.timeUnit": "s",
        }
    )
    interceptor = await AsyncCacheInterceptorFactory.inmemory(config)
    service = WeatherService(interceptor)

    print("=== Weather Service Example ===")

    print("\n1. First call to get_weather:")
    print(f"Result: {await service.get_weather('Seoul')}")

    print("\n2. Second call to get_weather (cached):")
    print(f"Result: {await service.get_weather('Seoul')}")

    print("\n3. Get forecast:")
    print(f"Result: {await service.get_forecast('Seoul', days=3)}")

    print("\n4. Waiting 4 seconds for forecast cache to expire...")
    await asyncio.sleep(4)
    print(f"Result: {await service.get_forecast('Seoul', days=3)}")

    print("\n5. Disable the weather cache at runtime:")
    config.replace({"cache": {"getWeather": {"ttl": "-1", "timeUnit": "m"}}})
    RefreshCoordinator(config, interceptor.registry).refresh()
    print(f"Result: {await service.get_weather('Seoul')}")

    print(f"\nRegistered policies: {interceptor.registry.snapshot()}")


if __name__ == "__main__":
    asyncio.run(main())
