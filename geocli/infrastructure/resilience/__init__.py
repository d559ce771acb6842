"""API Resilience Implementations.

Contains the retry service applying randomized linear backoff to calls
against the remote geocoding endpoint.
Bounded Context: API Resilience
"""
