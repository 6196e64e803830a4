"""
Enum Definitions for the Vehicle Marketplace

Contains the allowed values and UI constants shared by the form, the
filters and the admin dashboard.
"""

# Sentinel used by the enum filters to mean "no restriction"
ALL = 'All'

# Engine type enum values
ENGINE_TYPES = [
    'Petrol',
    'Diesel',
    'Electric',
    'Hybrid'
]

# Transmission type enum values
TRANSMISSION_TYPES = [
    'Automatic',
    'Manual',
    'Semi-Automatic'
]

# Colors offered by the browse filter (not enforced at storage)
COLORS = [
    'Red',
    'Blue',
    'Black'
]

# User role values
ADMIN_ROLE = 'admin'
DEFAULT_ROLE = 'user'
USER_ROLES = [
    ADMIN_ROLE,
    DEFAULT_ROLE
]

# Slider bounds of the browse page
PRICE_RANGE = (0, 100000)            # EUR
MILEAGE_RANGE = (0, 1000000)         # km
ENGINE_SIZE_RANGE = (1.0, 8.0)       # liters
