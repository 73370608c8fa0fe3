"""Configuration management components."""

from .config_manager import ConfigManager, FilterConfig, get_config_manager, reset_config_manager

__all__ = ['ConfigManager', 'FilterConfig', 'get_config_manager', 'reset_config_manager']
