"""Great-circle distance formulas in pure Python.

Every formula takes two points as decimal-degree ``lat, lon`` pairs and
returns the distance in metres. The spherical formulas use the mean Earth
radius; ``vincenty`` solves the inverse problem on the WGS-84 ellipsoid.

``GreatCircle`` wraps any formula behind an object method so the same
computation can be timed through method dispatch.

The formula bodies stick to the subset of Python that numba compiles in
nopython mode; ``adapters/numba_formulas.py`` JIT-compiles them as-is.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from domain.errors import ConvergenceError

if TYPE_CHECKING:
    from domain.models import Coordinate
    from domain.ports import DistanceFormula

# Mean Earth radius (IUGG), metres.
EARTH_RADIUS_M = 6_371_008.8

# WGS-84 ellipsoid.
WGS84_A = 6_378_137.0
WGS84_F = 1 / 298.257223563
WGS84_B = (1 - WGS84_F) * WGS84_A

VINCENTY_MAX_ITERATIONS = 200
VINCENTY_TOLERANCE = 1e-12


# ---------------------------------------------------------------------------
# Spherical formulas
# ---------------------------------------------------------------------------


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance; numerically stable for small separations."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlam = math.radians(lon2 - lon1)

    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(h))


def spherical_cosine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Spherical law of cosines."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dlam = math.radians(lon2 - lon1)

    c = math.sin(phi1) * math.sin(phi2) + math.cos(phi1) * math.cos(phi2) * math.cos(dlam)
    # Rounding can push c slightly outside [-1, 1] for (anti)coincident points.
    return EARTH_RADIUS_M * math.acos(min(1.0, max(-1.0, c)))


def equirectangular(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Equirectangular projection approximation.

    Accurate for short distances away from the poles.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    x = math.radians(lon2 - lon1) * math.cos((phi1 + phi2) / 2)
    y = phi2 - phi1
    return EARTH_RADIUS_M * math.hypot(x, y)


# ---------------------------------------------------------------------------
# Ellipsoidal formula
# ---------------------------------------------------------------------------


def vincenty(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Vincenty's inverse formula on the WGS-84 ellipsoid.

    Raises:
        ConvergenceError: If the longitude iteration does not converge,
            which happens for nearly antipodal points.
    """
    f = WGS84_F
    big_l = math.radians(lon2 - lon1)
    u1 = math.atan((1 - f) * math.tan(math.radians(lat1)))
    u2 = math.atan((1 - f) * math.tan(math.radians(lat2)))
    sin_u1, cos_u1 = math.sin(u1), math.cos(u1)
    sin_u2, cos_u2 = math.sin(u2), math.cos(u2)

    lam = big_l
    sin_sigma = cos_sigma = sigma = cos2_alpha = cos_2sm = 0.0
    converged = False
    for _ in range(VINCENTY_MAX_ITERATIONS):
        sin_lam, cos_lam = math.sin(lam), math.cos(lam)
        sin_sigma = math.hypot(cos_u2 * sin_lam, cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam)
        if sin_sigma == 0:
            return 0.0  # coincident points
        cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
        sigma = math.atan2(sin_sigma, cos_sigma)
        sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
        cos2_alpha = 1 - sin_alpha**2
        # Both points on the equator: cos2_alpha is zero.
        cos_2sm = cos_sigma - 2 * sin_u1 * sin_u2 / cos2_alpha if cos2_alpha else 0.0
        c = f / 16 * cos2_alpha * (4 + f * (4 - 3 * cos2_alpha))
        lam_prev = lam
        lam = big_l + (1 - c) * f * sin_alpha * (
            sigma + c * sin_sigma * (cos_2sm + c * cos_sigma * (-1 + 2 * cos_2sm**2))
        )
        if abs(lam - lam_prev) < VINCENTY_TOLERANCE:
            converged = True
            break
    if not converged:
        # Literal message: this body is also compiled by numba.
        raise ConvergenceError("vincenty failed to converge")

    u_sq = cos2_alpha * (WGS84_A**2 - WGS84_B**2) / WGS84_B**2
    a = 1 + u_sq / 16384 * (4096 + u_sq * (-768 + u_sq * (320 - 175 * u_sq)))
    b = u_sq / 1024 * (256 + u_sq * (-128 + u_sq * (74 - 47 * u_sq)))
    delta_sigma = (
        b
        * sin_sigma
        * (
            cos_2sm
            + b
            / 4
            * (
                cos_sigma * (-1 + 2 * cos_2sm**2)
                - b / 6 * cos_2sm * (-3 + 4 * sin_sigma**2) * (-3 + 4 * cos_2sm**2)
            )
        )
    )
    return WGS84_B * a * (sigma - delta_sigma)


FORMULAS: dict[str, DistanceFormula] = {
    "haversine": haversine,
    "spherical_cosine": spherical_cosine,
    "equirectangular": equirectangular,
    "vincenty": vincenty,
}


# ---------------------------------------------------------------------------
# Method dispatch
# ---------------------------------------------------------------------------


class GreatCircle:
    """Distance calculator bound to one formula.

    Example::

        gc = GreatCircle(haversine)
        gc.distance(Coordinate(51.5, -0.12), Coordinate(40.7, -74.0))
    """

    __slots__ = ("_formula",)

    def __init__(self, formula: DistanceFormula) -> None:
        self._formula = formula

    @property
    def formula(self) -> DistanceFormula:
        return self._formula

    def distance(self, a: Coordinate, b: Coordinate) -> float:
        """Return the distance in metres from *a* to *b*."""
        return self._formula(a.lat, a.lon, b.lat, b.lon)
