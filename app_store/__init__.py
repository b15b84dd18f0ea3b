"""
App Store Connect API client and utilities.
"""
from .api import AppStoreApi
from .helpers import generate_jwt_token, get_app_store_client

__all__ = ["AppStoreApi", "generate_jwt_token", "get_app_store_client"]
