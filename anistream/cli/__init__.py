"""
CLI Layer - Command line front end.

This module contains the Typer application and its commands.
"""
