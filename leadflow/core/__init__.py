"""Core infrastructure: configuration, logging, exceptions and auth primitives."""
