"""
Core domain models, mathematical primitives, and errors.

This module contains the expansion value types and the numeric building
blocks they are assembled from.
"""
