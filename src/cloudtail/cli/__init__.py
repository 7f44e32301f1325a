"""Command line interface for cloudtail."""
