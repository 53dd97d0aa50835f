import os

# ORS API Configuration
ORS_API_URL = os.environ.get("ORS_API_URL", "https://api.openrouteservice.org")
ORS_API_KEY = os.environ.get("ORS_API_KEY")
ORS_PROFILE = os.environ.get("ORS_PROFILE", "driving-car")
ORS_TIMEOUT = int(os.environ.get("ORS_TIMEOUT", "30"))

# Map defaults
DEFAULT_CENTER = (-34.397, 150.644)  # (lat, lng)
DEFAULT_ZOOM = 8

# Persisted locations
STORAGE_KEY = "locations"
STORE_PATH = os.environ.get(
    "ROUTE_PLANNER_STORE",
    os.path.join(os.path.expanduser("~"), ".route_planner", "locations.json"),
)

# Output paths
OUTPUT_MAP = os.environ.get("ROUTE_PLANNER_OUTPUT_MAP", "route_map.html")
