# shard_exporter/__init__.py
__version__ = "1.0.0"
BUILD_TIME = "unknown"
