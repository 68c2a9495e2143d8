"""Adapters for the filesystem, git and the project graph."""
