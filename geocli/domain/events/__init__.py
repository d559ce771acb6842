"""Domain events raised by the geocoding resilience layer."""
