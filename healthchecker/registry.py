from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import yaml
from healthchecker.models import TargetsFile

logger = logging.getLogger(__name__)


def load_targets_file(path: Path | str) -> list[str]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing targets file at {path}")

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid targets file {path}: {exc}") from exc
    parsed = TargetsFile.model_validate(data)
    return normalize_targets(parsed.targets)


def normalize_targets(urls: Iterable[str]) -> list[str]:
    """
    Strip whitespace, drop blanks and collapse duplicates.
    First occurrence wins so the configured order is preserved.
    """
    out: list[str] = []
    seen: set[str] = set()
    for raw in urls:
        url = raw.strip()
        if not url:
            continue
        if url in seen:
            logger.warning("Duplicate target ignored: %s", url)
            continue
        seen.add(url)
        out.append(url)
    return out


def resolve_targets(
    cli_targets: Iterable[str],
    env_targets: Iterable[str] = (),
    targets_file: Path | str | None = None,
) -> list[str]:
    targets = normalize_targets(cli_targets)
    if targets:
        return targets

    targets = normalize_targets(env_targets)
    if targets:
        return targets

    if targets_file:
        return load_targets_file(targets_file)

    return []
