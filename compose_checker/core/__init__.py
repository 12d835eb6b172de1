"""compose_checker.core: Foundation layer.

Contains the composition kernel, the curated vectors, type definitions,
configuration loading and the report builder. This module has NO
dependencies on compose_checker.properties or compose_checker.registry.
Only stdlib and numpy are allowed here.
"""
