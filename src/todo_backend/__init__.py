"""Application settings and logging for the todo backend."""

from .config import Config, ServerConfig, StoreConfig
from .logger import setup_logger

__all__ = ["Config", "ServerConfig", "StoreConfig", "setup_logger"]
