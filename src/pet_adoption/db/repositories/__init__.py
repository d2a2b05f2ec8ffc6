"""
pet_adoption.db.repositories

One repository per stored record type; `base.CrudRepo` holds the shared CRUD.
"""
