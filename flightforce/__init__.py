"""
Fixed-wing aircraft force model.

Aerodynamic surfaces, subsonic engines and an atmosphere model combined into
a per-tick force and torque aggregator for a host rigid-body integrator.
"""

__version__ = '0.1.0'
