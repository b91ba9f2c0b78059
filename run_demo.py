"""Demo script: fly the Hohmann LEO -> GEO preset and show the maneuver timeline."""
from orbit_sim.presets import hohmann_leo_geo_preset
from orbit_sim.simulation import compute_telemetry, run_simulation
import numpy as np

sequence = hohmann_leo_geo_preset()
final_state, log, reason = run_simulation(sequence, dt=1.0, verbose=True)

print("\n\n===== MANEUVER TIMELINE =====")
if len(log.time) > 0:
    times = np.array(log.time)
    alts = np.array(log.altitude)
    speeds = np.array(log.speed)
    print(f"Log entries: {len(log.time)}")
    print(f"Time range: {times[0]:.1f}s - {times[-1]:.1f}s")
    print(f"Peak altitude: {np.max(alts):.1f} km")
    print()
    prev = None
    for i, maneuver in enumerate(log.active_maneuver):
        if maneuver != prev:
            label = maneuver if maneuver else "coast"
            print(f"  t={times[i]:8.1f}s | Alt={alts[i]:9.1f} km | "
                  f"V={speeds[i]:8.1f} m/s | {label}")
            prev = maneuver

print()
print("===== FINAL ORBIT =====")
telemetry = compute_telemetry(final_state)
print(f"Termination:  {reason}")
print(f"Periapsis:    {telemetry['periapsis_altitude']/1000:.1f} km")
print(f"Apoapsis:     {telemetry['apoapsis_altitude']/1000:.1f} km")
print(f"Eccentricity: {telemetry['eccentricity']:.5f}")
print(f"Period:       {telemetry['period']/3600:.3f} h")
