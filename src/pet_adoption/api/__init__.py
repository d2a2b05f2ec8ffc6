"""
pet_adoption.api

HTTP surface of the pet adoption service.

Responsibilities:
- App factory, lifespan and router registration.
- Translation of `pet_adoption.errors` into `{message}` responses.
"""


# --- Module Notes -----------------------------------------------------------
# Handlers parse the request, take the gate's RequestContext and call one service.
