"""
factory-helper - factory_boy factories from SQLAlchemy models.

Reflects each model's table and writes a factory with a fake value
for every column it can guess.
"""

__version__ = "0.1.0"
