"""
Environment models for flight simulation.

This module provides the atmospheric model queried by the force model.
"""

from .atmosphere import Atmosphere

__all__ = ['Atmosphere']
