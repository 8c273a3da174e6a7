# config/__init__.py
"""
Configuration module
Settings and constants for the inspection backend
"""

from .settings import Config

__all__ = ['Config']
