"""Which tools a client may call."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Permissions:
    """Tool access policy: optional read-only mode and a set of disabled tools."""

    read_only: bool = False
    disabled_tools: set[str] = field(default_factory=set)

    def is_allowed(self, tool_name: str, is_write: bool) -> bool:
        if tool_name in self.disabled_tools:
            return False
        return not (self.read_only and is_write)