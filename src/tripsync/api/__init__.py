from tripsync.api.client import TripApiClient

__all__ = ["TripApiClient"]
