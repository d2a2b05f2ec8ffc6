"""
pet_adoption.auth

Password hashing, session tokens and the role gate.
"""
