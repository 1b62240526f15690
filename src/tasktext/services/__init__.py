"""Dialect detection, parsing and serialization of task text."""
