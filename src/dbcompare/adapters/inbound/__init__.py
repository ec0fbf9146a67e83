"""Inbound adapters - the command line."""
