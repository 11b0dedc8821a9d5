"""
Outbound Adapters Package
"""
