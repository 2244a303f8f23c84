# safetrade/api/__init__.py
# This file makes the api directory a Python package.

from . import auth
from . import geocoding
from . import moderation
from . import products
from . import users

__all__ = [
    "auth",
    "users",
    "products",
    "moderation",
    "geocoding",
]
