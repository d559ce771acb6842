"""Core Application Layer: Orchestrates use cases and application logic.

Connects the domain layer with the infrastructure layer through interfaces.
Contains the batch geocoding service and the command handler.
"""
