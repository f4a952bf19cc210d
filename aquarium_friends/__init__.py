"""
Aquarium Friends Simulation

A deterministic, headless aquarium: fish wander, get hungry, chase food
dropped by the user, eat it and cheer up. Bubbles, starfish and shells
decorate the tank.

Architecture: the simulation is the source of truth. Renderers are consumers
of the immutable per-tick snapshot.
"""

__version__ = "0.1.0"
