"""
Lower-atmosphere model (ISA troposphere).

Provides atmospheric properties as a function of altitude:
- Temperature (linear lapse)
- Pressure (barometric formula for a linear-temperature layer)
- Density (ideal gas law)
- Speed of sound

Units: SI (m, K, Pa, kg/m³)
"""

import warnings
import numpy as np


class Atmosphere:
    """
    Barometric / ideal-gas atmosphere for the lower layer.

    All properties are pure functions of altitude; the object only holds
    the gas constants and sea-level conditions.

    Parameters
    ----------
    sea_level_density : float
        Air density at sea level (kg/m³)
    sea_level_temperature : float
        Temperature at sea level (K)
    sea_level_pressure : float
        Pressure at sea level (Pa)
    lapse_rate : float
        Temperature lapse rate (K/m), positive means cooling with height
    gravity : float
        Gravitational acceleration (m/s²)
    molar_mass : float
        Molar mass of dry air (kg/mol)
    specific_heat : float
        Specific heat at constant pressure, cp (J/(kg·K))
    specific_heat_ratio : float
        Ratio of specific heats, gamma
    clamp_altitude : bool
        Clip altitude to the modeled band instead of extrapolating

    Notes
    -----
    The linear lapse law is only valid in the troposphere. The modeled band
    is MIN_ALTITUDE to MAX_ALTITUDE; outside it the layer would need an
    isothermal or inverted-lapse continuation that is not modeled here.

    Density is evaluated as rho0 * (p/p0) * (T0/T), which is the ideal gas
    law normalised to the configured sea-level state, so the sea-level
    density is reproduced exactly at altitude 0.
    """

    # Universal gas constant (J/(mol·K))
    R_universal = 8.314462618

    # Modeled band (m)
    MIN_ALTITUDE = -610.0
    MAX_ALTITUDE = 11000.0

    def __init__(self,
                 sea_level_density: float = 1.225,
                 sea_level_temperature: float = 288.15,
                 sea_level_pressure: float = 101325.0,
                 lapse_rate: float = 0.0065,
                 gravity: float = 9.80665,
                 molar_mass: float = 0.0289644,
                 specific_heat: float = 1005.0,
                 specific_heat_ratio: float = 1.4,
                 clamp_altitude: bool = True):
        self.sea_level_density = sea_level_density
        self.sea_level_temperature = sea_level_temperature
        self.sea_level_pressure = sea_level_pressure
        self.lapse_rate = lapse_rate
        self.gravity = gravity
        self.molar_mass = molar_mass
        self.specific_heat = specific_heat
        self.specific_heat_ratio = specific_heat_ratio
        self.clamp_altitude = clamp_altitude

    @property
    def specific_gas_constant(self) -> float:
        """Specific gas constant of air, R = R*/M (J/(kg·K))."""
        return self.R_universal / self.molar_mass

    def _altitude(self, altitude: float) -> float:
        """Apply the band policy to an altitude."""
        if not self.clamp_altitude:
            return altitude
        if altitude < self.MIN_ALTITUDE or altitude > self.MAX_ALTITUDE:
            warnings.warn("Altitude outside the modeled atmosphere band, clamping")
            return float(np.clip(altitude, self.MIN_ALTITUDE, self.MAX_ALTITUDE))
        return altitude

    def temperature(self, altitude: float) -> float:
        """Static temperature (K)."""
        h = self._altitude(altitude)
        return self.sea_level_temperature - self.lapse_rate * h

    def pressure(self, altitude: float) -> float:
        """
        Static pressure (Pa).

        p = p0 * (T/T0)^(g*M / (R* * L)); isothermal exponential if L == 0.
        """
        h = self._altitude(altitude)
        T0 = self.sea_level_temperature
        gM = self.gravity * self.molar_mass

        if self.lapse_rate == 0.0:
            return self.sea_level_pressure * np.exp(-gM * h / (self.R_universal * T0))

        theta = (T0 - self.lapse_rate * h) / T0
        exponent = gM / (self.R_universal * self.lapse_rate)
        return self.sea_level_pressure * theta**exponent

    def density(self, altitude: float) -> float:
        """Air density from the ideal gas law (kg/m³)."""
        p_ratio = self.pressure(altitude) / self.sea_level_pressure
        T_ratio = self.sea_level_temperature / self.temperature(altitude)
        return self.sea_level_density * p_ratio * T_ratio

    def speed_of_sound(self, altitude: float) -> float:
        """Speed of sound a = sqrt(gamma R T) (m/s)."""
        return np.sqrt(self.specific_heat_ratio * self.specific_gas_constant *
                       self.temperature(altitude))

    def get_mach_number(self, altitude: float, velocity: float) -> float:
        """Mach number for a true airspeed (m/s)."""
        return velocity / self.speed_of_sound(altitude)

    def dynamic_pressure(self, altitude: float, velocity: float) -> float:
        """Dynamic pressure q = 0.5 * rho * V² (Pa)."""
        return 0.5 * self.density(altitude) * velocity**2

    def get_properties(self, altitude: float) -> dict:
        """
        Get all atmospheric properties at an altitude as a dictionary.

        Parameters
        ----------
        altitude : float
            Geometric altitude (m)

        Returns
        -------
        dict
            temperature (K), pressure (Pa), density (kg/m³), speed of sound (m/s)
        """
        return {
            'altitude': altitude,
            'temperature': self.temperature(altitude),
            'pressure': self.pressure(altitude),
            'density': self.density(altitude),
            'speed_of_sound': self.speed_of_sound(altitude),
            'temperature_C': self.temperature(altitude) - 273.15,
        }

    def __repr__(self):
        return (f"Atmosphere(rho0={self.sea_level_density} kg/m³, "
                f"T0={self.sea_level_temperature} K, "
                f"p0={self.sea_level_pressure} Pa, "
                f"L={self.lapse_rate} K/m)")


if __name__ == "__main__":
    atm = Atmosphere()

    print(f"{'Alt (m)':<10} {'T (K)':<10} {'P (Pa)':<12} {'rho (kg/m3)':<12} {'a (m/s)':<10}")
    print("-" * 56)
    for alt in [0, 1000, 2500, 5000, 8000, 11000]:
        props = atm.get_properties(alt)
        print(f"{alt:<10.0f} {props['temperature']:<10.2f} {props['pressure']:<12.1f} "
              f"{props['density']:<12.4f} {props['speed_of_sound']:<10.1f}")
