from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol

from utils.logging_setup import init_logging


@dataclass
class RunContext:
    url: Any = None
    html: Any = None
    platform: Optional[str] = None
    profile: Any = None
    saved: bool = False
    errors: List[str] = field(default_factory=list)
    meta: dict = field(default_factory=dict)

    @property
    def halted(self) -> bool:
        return bool(self.errors)


class Step(Protocol):
    def run(self, ctx: RunContext) -> RunContext:
        ...


class Pipeline:
    def __init__(self, steps: List[Step]):
        self.steps = steps

    def run(self, ctx: RunContext) -> RunContext:
        # Make logging idempotent for any direct runner use
        init_logging()
        for step in self.steps:
            if ctx.halted:
                break
            ctx = step.run(ctx)
        return ctx
