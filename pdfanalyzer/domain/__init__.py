"""Domain Layer: value objects, entities, errors and the ports (interfaces)
that the core depends on.
"""
