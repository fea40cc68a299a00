"""
Subsonic turbojet model for the force aggregator.

Thrust from the momentum balance across the engine:
- Mass flow from intake area, inlet airspeed and ambient density,
  capped at the choked-flow limit of the intake
- Nozzle exit velocity from an isentropic expansion through the engine
  pressure ratio, scaled by nozzle efficiency
- T = mdot * (V_exit - V_inlet)
"""

import numpy as np
from dataclasses import dataclass

from ..environment.atmosphere import Atmosphere


@dataclass(frozen=True)
class SubsonicEngine:
    """
    Compressible-flow subsonic engine.

    Attributes
    ----------
    intake_area : float
        Intake capture area (m²)
    combustion_temperature : float
        Total temperature ahead of the nozzle (K)
    max_pressure_ratio : float
        Engine pressure ratio at full throttle (> 1)
    nozzle_efficiency : float
        Adiabatic nozzle efficiency [0, 1]
    """
    intake_area: float
    combustion_temperature: float
    max_pressure_ratio: float
    nozzle_efficiency: float = 1.0

    def pressure_ratio(self, throttle: float) -> float:
        """Engine pressure ratio, linear from 1 at idle to max at full throttle."""
        throttle = float(np.clip(throttle, 0.0, 1.0))
        return 1.0 + (self.max_pressure_ratio - 1.0) * throttle

    def choked_mass_flow_rate(self, altitude: float, atmosphere: Atmosphere) -> float:
        """
        Maximum (choked) mass flow through the intake (kg/s).

        mdot* = A p sqrt(gamma / (R T)) (2/(gamma+1))^((gamma+1)/(2(gamma-1)))
        """
        gamma = atmosphere.specific_heat_ratio
        R = atmosphere.specific_gas_constant
        T = atmosphere.temperature(altitude)
        p = atmosphere.pressure(altitude)

        choke_factor = (2.0 / (gamma + 1.0))**((gamma + 1.0) / (2.0 * gamma - 2.0))
        return self.intake_area * p * np.sqrt(gamma / (R * T)) * choke_factor

    def mass_flow_rate(self, altitude: float, inlet_airspeed: float,
                       atmosphere: Atmosphere) -> float:
        """Intake mass flow (kg/s), min(A V rho, choked limit)."""
        uncapped = self.intake_area * inlet_airspeed * atmosphere.density(altitude)
        return min(uncapped, self.choked_mass_flow_rate(altitude, atmosphere))

    def exit_airspeed(self, throttle: float, atmosphere: Atmosphere) -> float:
        """
        Nozzle exit velocity (m/s).

        V_e = sqrt(2 cp eta T_c (1 - (1/PR)^((gamma-1)/gamma)))
        """
        gamma = atmosphere.specific_heat_ratio
        PR = self.pressure_ratio(throttle)
        expansion = 1.0 - (1.0 / PR)**((gamma - 1.0) / gamma)
        return np.sqrt(2.0 * atmosphere.specific_heat * self.nozzle_efficiency *
                       self.combustion_temperature * expansion)

    def compute_thrust(self, altitude: float, inlet_airspeed: float,
                       throttle: float, atmosphere: Atmosphere) -> float:
        """
        Thrust magnitude of a single engine (N).

        Parameters:
        -----------
        altitude : float
            Geometric altitude (m)
        inlet_airspeed : float
            Airspeed at the intake (m/s)
        throttle : float
            Throttle setting [0, 1], clipped
        atmosphere : Atmosphere
            Ambient conditions

        Returns:
        --------
        thrust : float
            Net thrust, floored at zero when ram drag exceeds jet momentum
        """
        mdot = self.mass_flow_rate(altitude, inlet_airspeed, atmosphere)
        V_exit = self.exit_airspeed(throttle, atmosphere)
        return max(float(mdot * (V_exit - inlet_airspeed)), 0.0)


if __name__ == "__main__":
    atm = Atmosphere()
    engine = SubsonicEngine(intake_area=1.2, combustion_temperature=1200.0,
                            max_pressure_ratio=20.0, nozzle_efficiency=0.9)

    print("=== Subsonic Engine ===\n")
    for alt in [0.0, 5000.0, 10000.0]:
        print(f"Altitude {alt:.0f} m, choked mdot = "
              f"{engine.choked_mass_flow_rate(alt, atm):.1f} kg/s")
        for throttle in [0.0, 0.5, 1.0]:
            T = engine.compute_thrust(alt, 150.0, throttle, atm)
            print(f"  throttle {throttle:.1f}: thrust {T/1000:8.2f} kN")
