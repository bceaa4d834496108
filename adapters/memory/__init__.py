"""In-memory observation store and pet registry."""

from .store import InMemoryObservationStore, InMemoryPetRegistry

__all__ = ["InMemoryObservationStore", "InMemoryPetRegistry"]
