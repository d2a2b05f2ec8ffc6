"""
pet_adoption.observability

JSON logging (with credential redaction) and the request-id middleware.
"""
