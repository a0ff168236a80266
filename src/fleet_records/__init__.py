"""
fleet_records

Records service for a trucking fleet: drivers, the vehicle each one operates,
and the trips they haul.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
