import math

EARTH_RADIUS_KM = 6371


def get_distance(lat1, lng1, lat2, lng2):
    """Great-circle distance in km (haversine)."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def find_nearest_district(lat, lng, districts):
    nearest = None
    min_distance = math.inf
    for district in districts:
        distance = get_distance(lat, lng, float(district["lat"]), float(district["lng"]))
        if distance < min_distance:
            min_distance = distance
            nearest = district
    return nearest
