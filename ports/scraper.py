from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel


class ScraperPort(Protocol):
    def __call__(self, html: str, url: str) -> BaseModel:
        ...
