"""
CLI Output - Shared rendering helpers for query commands.

Results are printed either as Rich tables or as JSON suitable for
piping into other tools.
"""

import json
from typing import List, Optional

import typer
from pydantic import BaseModel

from anistream.cli import context


def wants_json(json_flag: bool) -> bool:
    """The --json flag wins; otherwise the configured default format applies."""
    if json_flag:
        return True
    try:
        return context.get_config_manager().settings.output.format == "json"
    except RuntimeError:
        return False


def show_urls() -> bool:
    try:
        return context.get_config_manager().settings.output.show_urls
    except RuntimeError:
        return True


def emit_json(records: List[BaseModel], indent: Optional[int] = 2) -> None:
    """Print records as a JSON array on stdout."""
    typer.echo(json.dumps([record.model_dump(mode="json") for record in records], indent=indent, ensure_ascii=False))


__all__ = ["wants_json", "show_urls", "emit_json"]
