"""Shared application interfaces."""
