"""
Force Breakdown Demonstration

Loads the bundled airliner configuration and prints every force contributor
for a single tick, then compares body and local angle-of-attack modes in a
rolling, sideslipping attitude.
"""

import numpy as np
import sys
import os

# Add package root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from flightforce.io.config import load_aircraft_config
from flightforce.core.aircraft import Airframe, AngleOfAttackMode


def print_breakdown(result):
    print(f"   Angle of attack: {result.angle_of_attack:7.2f} deg")
    print(f"   Air density:     {result.air_density:7.4f} kg/m^3")
    print(f"   Thrust:          {result.thrust / 1000:7.1f} kN")
    for c in result.contributions:
        print(f"   {c.source:>11} {c.kind:>7}: [{c.force[0]:11.1f}, {c.force[1]:11.1f}, {c.force[2]:11.1f}] N")
    print(f"   Total force:  {np.round(result.total_force, 1)} N")
    print(f"   Total torque: {np.round(result.total_torque, 4)} (per kg)")
    print()


def main():
    print("=" * 70)
    print("Force Breakdown Demonstration")
    print("=" * 70)
    print()

    config_path = os.path.join(os.path.dirname(__file__), '..', 'configs', 'airliner.yaml')
    config = load_aircraft_config(config_path)
    airframe = config.create_airframe()
    state = config.create_initial_state()

    print(f"1. {config.name} at {state.altitude:.0f} m, {state.airspeed:.0f} m/s, "
          f"throttle {config.throttle:.0%}")
    print_breakdown(airframe.evaluate(state, config.throttle))

    # Rolling with sideslip
    state.roll = 10.0
    state.velocity = np.array([8.0, -2.0, 150.0])
    state.angular_velocity = np.array([0.0, 0.0, 0.2])

    for mode in AngleOfAttackMode:
        model = Airframe(airframe.surfaces, airframe.engine, airframe.engine_count,
                         airframe.atmosphere, aoa_mode=mode, cg_offset=airframe.cg_offset)
        print(f"2. Rolling, sideslipping, {mode.value} angle of attack")
        print_breakdown(model.evaluate(state, config.throttle))


if __name__ == "__main__":
    main()
