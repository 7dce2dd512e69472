"""
Utility modules for the payment faker
"""
from .config_loader import FakerConfig, load_faker_config

__all__ = [
    'FakerConfig',
    'load_faker_config',
]
