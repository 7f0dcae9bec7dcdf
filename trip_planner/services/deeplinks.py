"""
Outbound links to map, search and booking services.
"""
from typing import Optional
from urllib.parse import quote


def encode(value: str) -> str:
    """Percent-encode like JavaScript's encodeURIComponent."""
    return quote(value, safe="-_.!~*'()")


def gmaps_search_link(query: str) -> str:
    return f"https://www.google.com/maps/search/?api=1&query={encode(query)}"


def gmaps_directions_link(origin: str, destination: str, mode: str = "driving") -> str:
    return (
        "https://www.google.com/maps/dir/?api=1"
        f"&origin={encode(origin)}&destination={encode(destination)}&travelmode={mode}"
    )


def google_flights_search(origin: str, destination: str, date_iso: Optional[str] = None) -> str:
    q = f"flights {origin} to {destination}"
    if date_iso:
        q += f" on {date_iso}"
    return f"https://www.google.com/search?q={encode(q)}"


def hotels_link(destination: str) -> str:
    return f"https://www.google.com/travel/hotels/{encode(destination)}?hl=en"


def restaurants_link(destination: str, tag: str = "") -> str:
    prefix = f"{tag} " if tag else ""
    return gmaps_search_link(f"{prefix}restaurants near {destination}")


def attractions_link(destination: str) -> str:
    return gmaps_search_link(f"top attractions in {destination}")


def google_images_link(query: str) -> str:
    return f"https://www.google.com/search?tbm=isch&q={encode(query)}"
