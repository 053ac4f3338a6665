"""Agent development token lookup."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

import yaml

from agentbridge.models import ENV_TOKEN

logger = logging.getLogger("agentbridge.credentials")


def resolve_token(project_dir: Path | None = None) -> str:
    """Find the development token for the Agent.

    The ``AGENTBRIDGE_TOKEN`` environment variable wins; otherwise the
    ``token`` key of ``<project_dir>/config.yaml`` and then of
    ``~/.agentbridge/config.yaml``. An empty string means no token, which a
    local Agent accepts.
    """
    if token := os.environ.get(ENV_TOKEN):
        return token

    for path in _token_files(project_dir):
        token = _read_token(path)
        if token:
            logger.debug("Using Agent token from %s", path)
            return token

    return ""


def mask_token(token: str) -> str:
    """Show only the last four characters of a token."""
    if not token:
        return "(not set)"
    if len(token) <= 8:
        return "****"
    return f"****{token[-4:]}"


def _token_files(project_dir: Path | None) -> Iterator[Path]:
    if project_dir is not None:
        yield project_dir / "config.yaml"
    yield Path.home() / ".agentbridge" / "config.yaml"


def _read_token(path: Path) -> str | None:
    if not path.is_file():
        return None
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Could not read %s: %s", path, exc)
        return None
    if not isinstance(data, dict) or not data.get("token"):
        return None
    return str(data["token"])
