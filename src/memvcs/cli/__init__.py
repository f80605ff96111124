"""Command-line interface for MemVCS."""
