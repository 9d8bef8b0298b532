"""Client for provisioning dynamic namespaces on the Platform API."""

__all__ = ["__version__"]

__version__ = "0.1.0"
