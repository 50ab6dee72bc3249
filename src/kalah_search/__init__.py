"""
Kalah move search with MTD-f, alpha-beta with memory and Zobrist hashing.
"""

__version__ = '0.1'
