"""
CLI Commands - Individual command implementations.

Each module implements one query command of the front end.
"""
