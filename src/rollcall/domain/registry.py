"""Registry port and the in-memory people registry.

The reconciliation engine only depends on the ``Registry`` protocol. The one
behaviour it relies on beyond plain list access is that ``update`` replaces an
entry in place: no other entry ever changes index because of it.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from rollcall.domain.model import IdentityKey, Person


log = getLogger(__name__)


@runtime_checkable
class Registry(Protocol):
    """Ordered, index-addressable collection of people."""

    def get(self, index: int) -> Person: ...

    def size(self) -> int: ...

    def index_of(self, person: Person) -> int: ...

    def add(self, person: Person) -> bool: ...

    def update(self, index: int, person: Person) -> bool: ...


class PeopleRegistry:
    """List-backed registry that refuses to hold two entries with one identity key."""

    def __init__(self, people: Iterable[Person] = ()) -> None:
        self._people: list[Person] = []
        self.modified = False
        for person in people:
            if not self.add(person):
                log.warning("Dropped registry entry with a duplicate identity key: %s", person)
        self.modified = False

    def __len__(self) -> int:
        return len(self._people)

    def __iter__(self) -> Iterator[Person]:
        return iter(tuple(self._people))

    def __repr__(self) -> str:
        return f"PeopleRegistry(size={len(self._people)})"

    def get(self, index: int) -> Person:
        return self._people[index]

    def size(self) -> int:
        return len(self._people)

    def people(self) -> tuple[Person, ...]:
        return tuple(self._people)

    def index_of(self, person: Person) -> int:
        """Return the index of the first entry equal to ``person``, or -1."""

        for index, existing in enumerate(self._people):
            if existing == person:
                return index
        return -1

    def add(self, person: Person | None) -> bool:
        if person is None:
            return False
        if self._clashes(person, exclude_index=-1):
            return False
        self._people.append(person)
        self.modified = True
        return True

    def update(self, index: int, person: Person | None) -> bool:
        """Replace the entry at ``index`` in place.

        The replaced entry keeps its description and tags; only the person
        data changes.
        """

        if person is None or not 0 <= index < len(self._people):
            return False
        if self._clashes(person, exclude_index=index):
            return False
        previous = self._people[index]
        person = person.with_metadata(description=previous.description, tags=previous.tags)
        self._people[index] = person
        self.modified = True
        return True

    def is_duplicate_government_id(
        self, government_id: IdentityKey, exclude_index: int = -1
    ) -> bool:
        if not government_id:
            return False
        return any(
            index != exclude_index and person.government_id == government_id
            for index, person in enumerate(self._people)
        )

    def is_duplicate_student_id(
        self, student_id: IdentityKey, exclude_index: int = -1
    ) -> bool:
        if not student_id:
            return False
        return any(
            index != exclude_index and person.student_id == student_id
            for index, person in enumerate(self._people)
        )

    def _clashes(self, person: Person, *, exclude_index: int) -> bool:
        government_id = person.government_id
        if government_id is not None and self.is_duplicate_government_id(
            government_id, exclude_index
        ):
            return True
        student_id = person.student_id
        return student_id is not None and self.is_duplicate_student_id(student_id, exclude_index)
