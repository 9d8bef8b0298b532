"""Configuration module for the namespace client."""
from .settings import ClientSettings, OAuthCredentials, load_oauth_credentials, load_settings

__all__ = ["ClientSettings", "OAuthCredentials", "load_oauth_credentials", "load_settings"]
