"""CLI module for toastmcp."""
