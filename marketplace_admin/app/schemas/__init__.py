"""
Pydantic schema definitions.

``common`` holds the result and pagination types shared by services
and controllers; ``views`` the read models returned by the admin HTTP
surface; the other modules define the request bodies it accepts.
"""
