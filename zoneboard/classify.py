EXCLUDED_SPORTS = {"Walk", "AlpineSki"}

BIKE_SPORTS = {
    "Ride", "VirtualRide", "EBikeRide", "EMountainBikeRide", "GravelRide",
    "MountainBikeRide", "Velomobile", "Handcycle",
}

def is_excluded(sport_type: str | None) -> bool:
    return sport_type in EXCLUDED_SPORTS

def classify_sport(sport_type: str | None, elevation_gain_m: float | None) -> str | None:
    """Bike activities with climbing are outdoor rides; flat ones are indoor (Peloton)."""
    if sport_type in BIKE_SPORTS:
        return "Ride" if (elevation_gain_m or 0) > 0 else "Peloton"
    return sport_type

def is_swim(sport_type: str | None) -> bool:
    return sport_type == "Swim"
