"""geoCLI: batch address geocoding with bounded concurrency and retries."""

__version__ = "1.0.0"
