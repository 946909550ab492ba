"""
Feature modules for GPX Combine.

Each feature is a self-contained module:
- gpx/ - Track models, parsing, assembly and serialization
- combine/ - File selection, per-file processing state and the coordinator
"""
