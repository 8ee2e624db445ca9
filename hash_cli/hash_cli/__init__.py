"""Command-line interface for comparing target-hash snapshots."""
