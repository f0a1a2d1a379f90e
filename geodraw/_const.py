"""
Constants declarations for geodraw
"""

# WGS84 Ellipsoid Constants
WGS84_A = 6378137.0  # Major axis (meters)
WGS84_F = 1 / 298.257223563  # Flattening
WGS84_B = 6356752.314245179  # Minor axis (meters)

# Mean Earth Radius (approximate for Haversine)
EARTH_RADIUS_METERS = 6_371_000.0

# Positions closer than this (squared, in scaled units) to the ellipsoid center
# have no defined geodetic surface point
CENTER_TOLERANCE_SQUARED = 0.1

EPSILON12 = 1e-12
EPSILON14 = 1e-14

# Latitude (radians) at which Web Mercator maps to a square world
WEB_MERCATOR_MAX_LATITUDE = 1.4844222297453324  # 85.0511287798 degrees
