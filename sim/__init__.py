"""Synthetic flight simulation and command-line tools."""
