"""Domain Layer: value objects, result models, events and interfaces.

Nothing in here performs I/O. Infrastructure adapters implement the
interfaces; core services depend only on them.
"""
