from dataclasses import dataclass, field
from typing import FrozenSet


@dataclass(frozen=True)
class LoaderOptions:
    """Per-call options passed to a document loader."""
    request_profile: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        # Accept any iterable of profile identifiers, keep it immutable.
        object.__setattr__(self, 'request_profile', frozenset(self.request_profile or ()))
