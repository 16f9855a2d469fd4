"""Client-facing entry points: Flask API, CLI and PDF ingestion helpers."""
