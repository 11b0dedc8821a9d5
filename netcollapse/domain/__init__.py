"""
Domain Layer

Network state, the compute steps and the cascade simulator. No I/O.
"""
