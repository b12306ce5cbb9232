"""
geotrace CLI - Command-line interface for location sessions.

Usage:
    geotrace-cli replay data/tracks/dinamos.jsonl
    geotrace-cli replay data/tracks/dinamos.jsonl --config config/geotrace.yaml
    geotrace-cli check-config config/geotrace.yaml
"""

__version__ = "1.0.0"
