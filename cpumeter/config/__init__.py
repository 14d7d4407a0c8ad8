"""Configuration module for the CPU meter."""

from .config_loader import ConfigLoader
from .meter_config import MeterConfig

__all__ = ["ConfigLoader", "MeterConfig"]
