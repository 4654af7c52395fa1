"""Command-line tools for eventlens.

- ``python -m src.cli keyword <text>``: free-text search
- ``python -m src.cli similar <event id>``: similar-event search
- ``python -m src.cli keywords <event id>``: keyphrase extraction
- ``python -m src.cli serve``: run the HTTP API
"""
