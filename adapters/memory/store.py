"""
In-memory implementations of the observation source and ownership gate.

Used by the demo script and the test suite. Both support an ``unavailable``
switch that makes every call return an error, to exercise outage handling.
"""

from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime

import structlog

from petcompare.domain.models import Observation, PetProfile
from petcompare.services.sources import Result

logger = structlog.get_logger(__name__)


class InMemoryObservationStore:
    """Observation records grouped by pet id."""

    def __init__(self, observations: Iterable[Observation] = ()) -> None:
        self._by_pet: defaultdict[str, list[Observation]] = defaultdict(list)
        self.unavailable = False
        self.fetch_count = 0
        self.logger = logger.bind(component="in_memory_observation_store")
        self.add(observations)

    def add(self, observations: Iterable[Observation]) -> None:
        for observation in observations:
            self._by_pet[observation.pet_id].append(observation)

    async def fetch_observations(
        self, pet_id: str, start: datetime, end: datetime
    ) -> Result[list[Observation], Exception]:
        self.fetch_count += 1
        if self.unavailable:
            return Result.err(ConnectionError("Observation store unavailable"))

        matching = sorted(
            (o for o in self._by_pet.get(pet_id, []) if start <= o.timestamp <= end),
            key=lambda o: o.timestamp,
        )
        self.logger.debug("observations_fetched", pet_id=pet_id, count=len(matching))
        return Result.ok(matching)


class InMemoryPetRegistry:
    """Pet profiles keyed by id, each carrying its owner."""

    def __init__(self, profiles: Iterable[PetProfile] = ()) -> None:
        self._profiles: dict[str, PetProfile] = {}
        self.unavailable = False
        for profile in profiles:
            self.register(profile)

    def register(self, profile: PetProfile) -> None:
        if profile.owner_id is None:
            raise ValueError(f"Pet {profile.pet_id} must have an owner to be registered")
        self._profiles[profile.pet_id] = profile

    async def check_ownership(
        self, user_id: str, pet_ids: list[str]
    ) -> Result[list[PetProfile], Exception]:
        if self.unavailable:
            return Result.err(ConnectionError("Pet registry unavailable"))

        owned = []
        for pet_id in pet_ids:
            profile = self._profiles.get(pet_id)
            if profile is not None and profile.owner_id == user_id and profile.is_active:
                owned.append(profile)
        return Result.ok(owned)
