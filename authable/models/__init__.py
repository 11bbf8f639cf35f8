from authable.models.app import App
from authable.models.base import Base
from authable.models.client import Client
from authable.models.token import Token
from authable.models.user import User


__all__ = [
    "Base",
    "User",
    "Token",
    "Client",
    "App",
]
