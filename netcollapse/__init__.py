"""
netcollapse

Cascading structural collapse of networks: repeatedly remove the most
loaded node, let overloaded nodes fail in turn, and record load, capacity
and resilience figures for every round.

Layout:
    domain/       network state, compute steps, cascade simulator
    application/  ports and the simulation service
    adapters/     topology files, JSON export, console output
    config/       settings and dependency container
"""

__version__ = "1.0.0"
