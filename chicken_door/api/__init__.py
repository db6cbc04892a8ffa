"""API endpoints package."""
from chicken_door.api.door import ACCESS_KEY_HEADER, GATEWAY_EXTENSION, door_bp

__all__ = [
    'door_bp',
    'ACCESS_KEY_HEADER',
    'GATEWAY_EXTENSION',
]
