"""Validation and throughput simulation for distributed-system architecture graphs."""

__version__ = "0.1.0"
