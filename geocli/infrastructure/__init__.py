"""Infrastructure Layer: Contains concrete implementations and adapters.

Connects the application to the outside world (HTTP endpoint, file system,
console) by implementing the interfaces defined in the domain layer.
Also includes configuration, logging setup and the retry service.
"""
