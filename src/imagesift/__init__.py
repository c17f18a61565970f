"""imagesift — Image collection providers for media aggregation."""

__version__ = "0.1.0"
