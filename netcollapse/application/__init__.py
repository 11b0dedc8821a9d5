"""
Application Layer

Use case ports and the services orchestrating the domain.
"""
