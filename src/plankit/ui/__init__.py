"""Command line interface for plankit."""
