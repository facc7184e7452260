"""CLI package for Realm Relay

Commands: serve (default), accounts, send. Run with `python -m cli`.
"""
