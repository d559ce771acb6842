"""Adapters talking to the remote geocoding endpoint over HTTP."""
