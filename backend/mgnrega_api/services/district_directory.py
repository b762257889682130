"""Seed list of Maharashtra districts, also served when storage has nothing."""

DEFAULT_STATE = "Maharashtra"

MAHARASHTRA_DISTRICTS = (
    {"name": "Kolhapur", "lat": 16.7050, "lng": 74.2433, "code": "KOL"},
    {"name": "Mumbai Suburban", "lat": 19.0760, "lng": 72.8777, "code": "MUM"},
    {"name": "Pune", "lat": 18.5204, "lng": 73.8567, "code": "PUN"},
    {"name": "Nagpur", "lat": 21.1458, "lng": 79.0882, "code": "NAG"},
    {"name": "Nashik", "lat": 19.9975, "lng": 73.7898, "code": "NAS"},
    {"name": "Aurangabad", "lat": 19.8762, "lng": 75.3433, "code": "AUR"},
    {"name": "Solapur", "lat": 17.6599, "lng": 75.9064, "code": "SOL"},
    {"name": "Thane", "lat": 19.2183, "lng": 72.9781, "code": "THA"},
    {"name": "Ahmednagar", "lat": 19.0948, "lng": 74.7480, "code": "AHM"},
    {"name": "Satara", "lat": 17.6805, "lng": 73.9903, "code": "SAT"},
    {"name": "Sangli", "lat": 16.8524, "lng": 74.5815, "code": "SAN"},
    {"name": "Jalgaon", "lat": 21.0077, "lng": 75.5626, "code": "JAL"},
    {"name": "Amravati", "lat": 20.9320, "lng": 77.7523, "code": "AMR"},
    {"name": "Raigad", "lat": 18.5204, "lng": 73.0169, "code": "RAI"},
    {"name": "Ratnagiri", "lat": 16.9902, "lng": 73.3120, "code": "RAT"},
)


def fallback_districts():
    return [dict(d) for d in MAHARASHTRA_DISTRICTS]
