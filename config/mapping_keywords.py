"""Keyword suggestions for filled region to room parameter mapping.

Each keyword maps to the room parameter names preferred when a filled region
parameter contains that keyword. Names are listed in order of preference.
"""

SUGGESTION_KEYWORDS = {
    "name": ["Name", "Room Name"],
    "number": ["Number", "Room Number"],
    "area": ["Area"],
    "department": ["Department", "Room Department"],
    "occupancy": ["Occupancy", "Room Occupancy"],
    "level": ["Level"],
    "comments": ["Comments"],
    "phase": ["Phase"],
}

# Reserved "do not map" choice, always offered first
SKIP_LABEL = "(Skip)"
