"""Placeholder substitution for configured paths"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Mapping

ENV_PLACEHOLDER = re.compile(r"\$\{env\.([^}]+)\}")


@dataclass(frozen=True)
class PlaceholderContext:
    """Values available to ${...} placeholders"""

    workspace_root: str | None = None
    cwd: str = field(default_factory=os.getcwd)
    env: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))


def substitute_placeholders(value: str, context: PlaceholderContext) -> str:
    """Replace ${workspaceRoot}, ${cwd} and ${env.NAME}; unknown values become empty"""
    value = value.replace("${workspaceRoot}", context.workspace_root or "")
    value = value.replace("${cwd}", context.cwd)
    return ENV_PLACEHOLDER.sub(lambda m: context.env.get(m.group(1), ""), value)
