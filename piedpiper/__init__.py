"""Compression, hashing and cellular-automaton masking tools."""

__version__ = "0.1.0"