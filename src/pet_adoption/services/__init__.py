"""
pet_adoption.services

Service-layer package.

Responsibilities:
- Own transaction boundaries and persistence decisions.
- Run field validation and referential-integrity checks before writes.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services raise `pet_adoption.errors` types; HTTP translation lives in `api.errors`.
