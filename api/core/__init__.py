"""
Building blocks used by every department router: the asyncpg pool holder,
the API error types and logging setup.
"""
