"""
pet_adoption

Pet adoption management API: credential store, role gate, and the shelter,
adopter, animal and adoption registries.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
