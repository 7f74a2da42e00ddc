"""EVE Ship Replacement Program backend"""

__version__ = "0.1.0"
