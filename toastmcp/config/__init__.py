"""Configuration module for toastmcp."""

from toastmcp.config.loader import load_config, get_config_path, save_config
from toastmcp.config.schema import Config

__all__ = ["Config", "load_config", "get_config_path", "save_config"]
