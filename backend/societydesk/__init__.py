"""
SocietyDesk - residential visitor and amenity management backend
"""

__version__ = "1.0.0"
