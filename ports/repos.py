from __future__ import annotations

from typing import Any, Dict, List, Protocol, Tuple

from pydantic import BaseModel


class ProfileRepoPort(Protocol):
    def upsert(self, profile: BaseModel) -> Tuple[int, bool]:
        ...

    def list_recent(self, limit: int = 50) -> List[Dict[str, Any]]:
        ...
