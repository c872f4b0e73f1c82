import logging

import pytest

from timed_cacheable import (
    CacheType,
    Directive,
    DirectiveResolver,
    InvalidTimeUnit,
    InvalidTtlValue,
    MalformedExpression,
    MissingTimeUnitConfiguration,
    MissingTtlConfiguration,
    PropertySource,
    TimeUnit,
    TtlPolicy,
    TtlRegistry,
)


def make_resolver(properties=None):
    registry = TtlRegistry()
    config = PropertySource.from_properties(properties or {})
    return DirectiveResolver(config, registry), registry


class TestLiteralTtl:
    def test_literal_string_defaults_to_minutes(self):
        resolver, _ = make_resolver()
        policy = resolver.resolve(Directive("posts", ttl="90"))
        assert policy == TtlPolicy(90, TimeUnit.MINUTES, CacheType.REDIS)

    def test_literal_int_with_explicit_unit(self):
        resolver, _ = make_resolver()
        policy = resolver.resolve(Directive("posts", ttl=30, time_unit=TimeUnit.SECONDS))
        assert policy == TtlPolicy(30, TimeUnit.SECONDS, CacheType.REDIS)

    def test_literal_keeps_cache_type(self):
        resolver, _ = make_resolver()
        policy = resolver.resolve(Directive("posts", ttl="5", time_unit="h", cache_type=CacheType.HAZELCAST))
        assert policy == TtlPolicy(5, TimeUnit.HOURS, CacheType.HAZELCAST)

    def test_literal_ignores_configuration(self):
        resolver, _ = make_resolver({"cache.posts.ttl": "1", "cache.posts.timeUnit": "s"})
        assert resolver.resolve(Directive("posts", ttl="7")).ttl == 7

    def test_unknown_literal_unit_falls_back_to_minutes(self, caplog):
        resolver, _ = make_resolver()
        with caplog.at_level(logging.WARNING):
            policy = resolver.resolve(Directive("posts", ttl="10", time_unit="fortnight"))
        assert policy.time_unit is TimeUnit.MINUTES
        assert "Unrecognized time unit" in caplog.text


class TestIndirectTtl:
    def test_per_cache_configuration(self):
        resolver, _ = make_resolver({"cache.foo.ttl": "30", "cache.foo.timeUnit": "s"})
        policy = resolver.resolve(Directive("foo", ttl="${cache.foo}"))
        assert policy == TtlPolicy(30, TimeUnit.SECONDS, CacheType.REDIS)

    def test_numeric_configuration_values(self):
        config = PropertySource.from_dict({"cache": {"foo": {"ttl": 45, "timeUnit": "h"}}})
        resolver = DirectiveResolver(config, TtlRegistry())
        assert resolver.resolve(Directive("foo", ttl="${cache.foo}")) == TtlPolicy(45, TimeUnit.HOURS)

    def test_falls_back_to_default(self, caplog):
        resolver, _ = make_resolver({"cache.default.ttl": "60", "cache.default.timeUnit": "m"})
        with caplog.at_level(logging.WARNING):
            policy = resolver.resolve(Directive("foo", ttl="${cache.foo}"))
        assert policy == TtlPolicy(60, TimeUnit.MINUTES, CacheType.REDIS)
        assert "There is no cache.foo.ttl property" in caplog.text

    def test_ttl_and_unit_fall_back_independently(self):
        resolver, _ = make_resolver({"cache.foo.ttl": "15", "cache.default.ttl": "60", "cache.default.timeUnit": "h"})
        assert resolver.resolve(Directive("foo", ttl="${cache.foo}")) == TtlPolicy(15, TimeUnit.HOURS)

    def test_negative_configured_ttl_is_kept(self):
        resolver, _ = make_resolver({"cache.foo.ttl": "-1", "cache.foo.timeUnit": "m"})
        assert resolver.resolve(Directive("foo", ttl="${cache.foo}")).is_disabled

    def test_missing_ttl_configuration(self):
        resolver, _ = make_resolver({"cache.foo.timeUnit": "s"})
        with pytest.raises(MissingTtlConfiguration):
            resolver.resolve(Directive("foo", ttl="${cache.foo}"))

    def test_missing_time_unit_configuration(self):
        resolver, _ = make_resolver({"cache.foo.ttl": "30"})
        with pytest.raises(MissingTimeUnitConfiguration):
            resolver.resolve(Directive("foo", ttl="${cache.foo}"))

    def test_unparsable_ttl_is_not_defaulted(self):
        resolver, _ = make_resolver({"cache.foo.ttl": "soon", "cache.default.ttl": "60", "cache.default.timeUnit": "m"})
        with pytest.raises(InvalidTtlValue):
            resolver.resolve(Directive("foo", ttl="${cache.foo}"))

    def test_unknown_configured_unit_is_rejected(self):
        resolver, _ = make_resolver({"cache.foo.ttl": "30", "cache.foo.timeUnit": "d"})
        with pytest.raises(InvalidTimeUnit):
            resolver.resolve(Directive("foo", ttl="${cache.foo}"))

    def test_unknown_default_unit_is_rejected(self):
        resolver, _ = make_resolver({"cache.foo.ttl": "30", "cache.default.timeUnit": "minutes"})
        with pytest.raises(InvalidTimeUnit):
            resolver.resolve(Directive("foo", ttl="${cache.foo}"))

    @pytest.mark.parametrize(
        "expression",
        ["${foo}", "${cache.}", "${cache.1abc}", "${cache.foo.bar}", "cache.foo", "${cache.foo} ", "-1", "", "1.5"],
    )
    def test_malformed_expressions(self, expression):
        resolver, _ = make_resolver({"cache.default.ttl": "60", "cache.default.timeUnit": "m"})
        with pytest.raises(MalformedExpression):
            resolver.resolve(Directive("foo", ttl=expression))


class TestDeclare:
    def test_declare_registers_under_first_name(self):
        resolver, registry = make_resolver({"cache.foo.ttl": "30", "cache.foo.timeUnit": "s"})
        policy = resolver.declare(Directive(("foo", "bar"), ttl="${cache.foo}"))
        assert registry.get("foo") == policy
        assert "bar" not in registry

    def test_declare_failure_registers_nothing(self, caplog):
        resolver, registry = make_resolver()
        with caplog.at_level(logging.ERROR):
            assert resolver.declare(Directive("foo", ttl="${cache.foo}")) is None
        assert registry.get("foo") is None
        assert "Could not resolve TTL for cache foo" in caplog.text

    def test_declare_all_isolates_failures(self):
        resolver, registry = make_resolver({"cache.good.ttl": "5", "cache.good.timeUnit": "m"})
        failures = resolver.declare_all(
            [
                Directive("good", ttl="${cache.good}"),
                Directive("missing", ttl="${cache.missing}"),
                Directive("broken", ttl="not-an-expression"),
                Directive("literal", ttl=3),
            ]
        )
        assert set(failures) == {"missing", "broken"}
        assert isinstance(failures["missing"], MissingTtlConfiguration)
        assert isinstance(failures["broken"], MalformedExpression)
        assert registry.get("good") == TtlPolicy(5, TimeUnit.MINUTES)
        assert registry.get("literal") == TtlPolicy(3, TimeUnit.MINUTES)
        assert "missing" not in registry
