"""
Release-candidate tag gate for release pipelines.
"""

__version__ = "0.1.0"
