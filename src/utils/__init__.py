"""
Utility modules for the dark pool payment proxy
"""
from .config_loader import PaymentsConfig, ProxySettings, load_settings

__all__ = [
    'PaymentsConfig',
    'ProxySettings',
    'load_settings',
]
