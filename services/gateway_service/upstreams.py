"""
Upstream addressing

Resources are a closed set. The table mapping them to backend addresses is
built once from settings and handed to the app factory; it never changes
while the process runs.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional


class Resource(str, Enum):
    """Resources exposed under ``/api/``"""
    USERS = "users"
    PRODUCTS = "products"
    ORDERS = "orders"

    @classmethod
    def lookup(cls, name: str) -> Optional["Resource"]:
        """Exact, case-sensitive match; ``None`` for anything else"""
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True)
class UpstreamTarget:
    """Where requests for one resource are sent"""
    resource: Resource
    base_url: str
    path: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if self.path is None:
            object.__setattr__(self, "path", f"/{self.resource.value}")

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.path}"

    @property
    def health_url(self) -> str:
        return f"{self.base_url}/health"


class UpstreamTable(Mapping[str, UpstreamTarget]):
    """Read-only resource name -> UpstreamTarget mapping"""

    def __init__(self, targets: Iterable[UpstreamTarget]):
        entries = {}
        for target in targets:
            if target.resource.value in entries:
                raise ValueError(f"Duplicate upstream for resource '{target.resource.value}'")
            entries[target.resource.value] = target
        self._targets = MappingProxyType(entries)

    def __getitem__(self, name: str) -> UpstreamTarget:
        return self._targets[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._targets)

    def __len__(self) -> int:
        return len(self._targets)

    def resolve(self, name: str) -> Optional[UpstreamTarget]:
        """Target for a resource name taken from a request path"""
        resource = Resource.lookup(name)
        if resource is None:
            return None
        return self._targets.get(resource.value)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{k}={v.url}" for k, v in self._targets.items())
        return f"UpstreamTable({pairs})"
