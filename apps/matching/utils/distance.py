# apps/matching/utils/distance.py

import math

# Radius of Earth in miles
EARTH_RADIUS_MILES = 3959


def distance_miles(lat1, lng1, lat2, lng2):
    """
    Great-circle distance between two coordinates using the Haversine formula.

    Inputs are decimal degrees. Returns distance in miles.
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlng / 2) ** 2
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_MILES * c
