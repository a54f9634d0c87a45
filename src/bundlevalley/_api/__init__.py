"""Command modules for the bundle tracker service."""
