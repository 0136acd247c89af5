import numpy as np

from fin_bending.constants import g, GPa_to_MPa, mm_to_m


class MetricConverter:
    def area_mm2_m2(areamm2):
        aream2 = areamm2 * mm_to_m**2
        return aream2

    def pressure_GPa_MPa(pressureGPa):
        pressureMPa = pressureGPa * GPa_to_MPa
        return pressureMPa

    def force_N_kg(forceN):
        """
        Mass that weighs forceN under standard gravity
        """
        masskg = forceN / g
        return masskg


class AngleConverter:
    def rad_to_deg(anglerad):
        angledeg = anglerad * 180 / np.pi
        return angledeg

    def deg_to_rad(angledeg):
        anglerad = angledeg * np.pi / 180
        return anglerad
