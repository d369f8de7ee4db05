"""
radar-spine: technology radar ingestion.

Reads radar data from a CSV url, a public Google Sheet, or a protected sheet
behind Google login; validates and normalizes it; and produces a Radar model
for a rendering collaborator.
"""

__version__ = "0.1.0"
