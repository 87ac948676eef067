"""Command line interface for syskit."""
