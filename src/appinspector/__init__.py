"""appinspector - structural introspection of an application's models and enums."""

__version__ = "0.1.0"
