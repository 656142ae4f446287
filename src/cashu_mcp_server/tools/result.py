"""Tagged tool results: every tool call ends in exactly one of these."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Success:
    payload: dict[str, Any]

    def to_json(self) -> str:
        return json.dumps(self.payload, indent=2, default=str)


@dataclass(frozen=True)
class Failure:
    message: str

    def to_json(self) -> str:
        return json.dumps({"error": self.message}, indent=2)


ToolResult = Union[Success, Failure]
