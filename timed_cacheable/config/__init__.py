from .source import PropertySource, expand_properties

__all__ = ["PropertySource", "expand_properties"]
