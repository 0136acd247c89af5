g = 9.81  # Acceleration due to gravity in m/s^2, used for the load in kg
GPa_to_MPa = 1000  # E is given in GPa, lengths in mm and loads in N
mm_to_m = 1e-3
DEFAULT_SEGMENTS = 200  # Fallback when the config or caller gives an invalid count
MIN_SEGMENTS = 3
