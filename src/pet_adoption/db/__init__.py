"""
pet_adoption.db

Persistence package (SQLAlchemy async, SQLite by default).

Responsibilities:
- ORM models for identities and the four registries.
- Engine/session setup and per-record repositories.
"""


# --- Module Notes -----------------------------------------------------------
# The store is the only shared state between requests; services never cache rows.
