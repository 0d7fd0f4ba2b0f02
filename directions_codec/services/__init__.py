from .directions_client import DirectionsClient

__all__ = ["DirectionsClient"]
