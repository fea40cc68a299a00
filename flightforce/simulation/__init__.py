"""
Host-side simulation loop for driving the force model.
"""

from .runner import SimulationRunner

__all__ = ['SimulationRunner']
