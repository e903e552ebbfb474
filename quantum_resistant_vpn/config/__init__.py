"""
Configuration for the quantum-resistant VPN tool.
"""

from .settings import SettingsStore, configure_settings, get_settings, load_environment

__all__ = ['SettingsStore', 'configure_settings', 'get_settings', 'load_environment']
