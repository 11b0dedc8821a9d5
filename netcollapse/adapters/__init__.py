"""
Adapters Package

Inbound (CLI display) and outbound (files, export) adapters.
"""
