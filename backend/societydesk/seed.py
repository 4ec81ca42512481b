"""
Sample amenities for the residential complex
"""

from decimal import Decimal
from typing import Dict, List

from societydesk.models.enums import AmenityLocation, AmenityType
from societydesk.models.schemas import Amenity
from societydesk.store.memory import AmenityStore

GF = AmenityLocation.GROUND_FLOOR
RC = AmenityLocation.ROOFTOP_CLOSED
RO = AmenityLocation.ROOFTOP_OPEN

SAMPLE_AMENITIES: List[Dict] = [
    # Ground floor
    dict(amenity_id="amen-gf-01", name="Music Room", code="AMEN-GF-01", location=GF,
         type=AmenityType.RESERVATION, capacity=10, current_occupancy=3,
         equipment=["Piano", "Guitar", "Drums", "Microphones", "Sound System"],
         rules=["No food or drinks", "Maximum 2 hours per session", "Clean up after use"]),
    dict(amenity_id="amen-gf-02", name="Cinema Hall", code="AMEN-GF-02", location=GF,
         type=AmenityType.RESERVATION, capacity=50, current_occupancy=15,
         requires_payment=True, price_per_hour=Decimal("25"),
         equipment=["Projector", "Sound System", "Recliner Seats", "Air Conditioning"],
         rules=["No outside food", "Advance booking required"]),
    dict(amenity_id="amen-gf-03", name="Fitness Gym", code="AMEN-GF-03", location=GF,
         type=AmenityType.RESERVATION, capacity=25, current_occupancy=18,
         equipment=["Treadmills", "Weight Machines", "Free Weights", "Yoga Mats"],
         rules=["Towel mandatory", "90 minutes maximum per session"]),
    dict(amenity_id="amen-gf-04", name="Social Hall", code="AMEN-GF-04", location=GF,
         type=AmenityType.RESERVATION, capacity=100, current_occupancy=0,
         requires_approval=True, requires_payment=True, price_per_hour=Decimal("100"),
         equipment=["Stage", "Sound System", "Tables", "Chairs", "Kitchen Access"],
         rules=["Admin approval required", "Security deposit needed"]),
    dict(amenity_id="amen-gf-05", name="Children Play Room", code="AMEN-GF-05", location=GF,
         type=AmenityType.MONITORING, capacity=20, current_occupancy=8, requires_guardian=True,
         equipment=["Soft Play Equipment", "Toys", "Books", "Safety Mats"],
         rules=["Guardian supervision mandatory", "Age limit: 2-12 years"]),
    dict(amenity_id="amen-gf-06", name="Snooker Room", code="AMEN-GF-06", location=GF,
         type=AmenityType.RESERVATION, capacity=8, current_occupancy=4,
         requires_payment=True, price_per_hour=Decimal("15"),
         equipment=["2 Snooker Tables", "Cues", "Balls", "Scoreboard"],
         rules=["Maximum 4 players per table"]),
    dict(amenity_id="amen-gf-07", name="Library & Reading Room", code="AMEN-GF-07", location=GF,
         type=AmenityType.OPEN_ACCESS, capacity=30, current_occupancy=12,
         equipment=["Books", "Study Tables", "Computers", "WiFi"],
         rules=["Silence mandatory", "Return books within 14 days"]),
    dict(amenity_id="amen-gf-08", name="Swimming Pool", code="AMEN-GF-08", location=GF,
         type=AmenityType.RESERVATION, capacity=40, current_occupancy=22,
         requires_payment=True, price_per_hour=Decimal("20"),
         equipment=["Pool", "Changing Rooms", "Showers"],
         rules=["Swimming attire mandatory", "Children under 12 need supervision"]),

    # Rooftop, closed access
    dict(amenity_id="amen-rt-c-01", name="Rooftop Children Area", code="AMEN-RT-C-01", location=RC,
         type=AmenityType.MONITORING, capacity=15, current_occupancy=7, requires_guardian=True,
         equipment=["Playground Equipment", "Safety Barriers", "Seating"],
         rules=["Guardian supervision required"]),
    dict(amenity_id="amen-rt-c-02", name="Table Tennis Arena", code="AMEN-RT-C-02", location=RC,
         type=AmenityType.RESERVATION, capacity=8, current_occupancy=4,
         requires_payment=True, price_per_hour=Decimal("10"),
         equipment=["4 Table Tennis Tables", "Paddles", "Balls"],
         rules=["Maximum 1 hour per booking"]),
    dict(amenity_id="amen-rt-c-03", name="Badminton Court", code="AMEN-RT-C-03", location=RC,
         type=AmenityType.RESERVATION, capacity=12, current_occupancy=6,
         requires_payment=True, price_per_hour=Decimal("30"),
         equipment=["2 Badminton Courts", "Nets", "Rackets"],
         rules=["Court shoes mandatory"]),

    # Rooftop, open access
    dict(amenity_id="amen-rt-o-01", name="Jogging Track", code="AMEN-RT-O-01", location=RO,
         type=AmenityType.OPEN_ACCESS, capacity=20, current_occupancy=8,
         equipment=["Marked Track", "Distance Markers", "Water Stations"],
         rules=["Jogging direction clockwise", "No cycling allowed"]),
    dict(amenity_id="amen-rt-o-03", name="Garden Seating Area", code="AMEN-RT-O-03", location=RO,
         type=AmenityType.OPEN_ACCESS, capacity=12, current_occupancy=3,
         equipment=["Garden Furniture", "Umbrellas", "Lighting"],
         rules=["Quiet zone"]),
    dict(amenity_id="amen-rt-o-04", name="BBQ & Grilling Area", code="AMEN-RT-O-04", location=RO,
         type=AmenityType.RESERVATION, capacity=16, current_occupancy=0,
         requires_payment=True, price_per_hour=Decimal("40"),
         equipment=["BBQ Grills", "Tables", "Fire Safety Equipment"],
         rules=["Fire safety training required", "No unattended cooking"]),
    dict(amenity_id="amen-rt-o-09", name="Service Room", code="SERVICE-01", location=RO,
         type=AmenityType.OPEN_ACCESS, capacity=3, current_occupancy=0,
         equipment=["Storage Shelves", "Cleaning Supplies", "Tools"],
         rules=["Staff access priority", "Return tools after use"]),
]


def load_sample_amenities(store: AmenityStore) -> int:
    """Add the sample amenities to a store. Returns how many were added."""
    for data in SAMPLE_AMENITIES:
        store.add(Amenity(**data))
    return len(SAMPLE_AMENITIES)
