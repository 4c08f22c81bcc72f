"""
Application layer.

Coordinates domain objects within units of work. It depends on the domain
layer, never the other way around.
"""
