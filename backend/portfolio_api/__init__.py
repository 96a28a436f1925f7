"""Portfolio site backend: contact form pipeline and content helpers."""

__version__ = "1.0.0"
