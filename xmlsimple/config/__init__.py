"""
Configuration module for xmlsimple.

This package handles configuration management for the parsers.
"""

from .settings import Settings

__all__ = ['Settings']
