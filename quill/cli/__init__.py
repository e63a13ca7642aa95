"""Command-line interface for quill."""
