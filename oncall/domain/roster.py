"""In-memory roster and preference storage."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from oncall.domain.errors import ConfigurationError
from oncall.domain.models import Person, PreferenceSet
from oncall.services.dates import normalize_date

logger = logging.getLogger(__name__)


class Roster:
    """
    People available for duty and their date preferences.

    Emails are matched exactly as stored; callers are expected to trim and
    lower-case them beforehand. Person ids are handed out in insertion
    order unless the caller supplies one.
    """

    def __init__(self):
        self._people: List[Person] = []
        self._preferences: Dict[str, PreferenceSet] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._people)

    def __iter__(self) -> Iterator[Person]:
        return iter(self._people)

    def __contains__(self, email: str) -> bool:
        return email in self._preferences

    @property
    def people(self) -> List[Person]:
        return list(self._people)

    @property
    def preferences(self) -> Dict[str, PreferenceSet]:
        return dict(self._preferences)

    def get(self, email: str) -> Optional[Person]:
        return next((p for p in self._people if p.email == email), None)

    def add_person(self, name: str, email: str, person_id: int | None = None) -> Person:
        """
        Add a person with empty preferences.

        Raises:
            ConfigurationError: If the email is already on the roster
        """
        if email in self._preferences:
            raise ConfigurationError(f"Person with email {email} already exists")
        if person_id is None:
            person_id = self._next_id
        self._next_id = max(self._next_id, person_id) + 1

        person = Person(name=name, email=email, person_id=person_id)
        self._people.append(person)
        self._preferences[email] = PreferenceSet()
        logger.debug("Added %s <%s> as id %d", name, email, person_id)
        return person

    def remove_person(self, email: str) -> None:
        """Remove a person and their preferences. Existing schedules are not touched."""
        if email not in self._preferences:
            raise ConfigurationError(f"Person with email {email} not found")
        self._people = [p for p in self._people if p.email != email]
        del self._preferences[email]

    def set_preferences(
        self,
        email: str,
        preferred: Iterable,
        not_preferred: Iterable,
    ) -> PreferenceSet:
        """
        Replace a person's preferences with canonicalized date sets.

        Args:
            email: Roster email
            preferred: Date-like values the person would like to work
            not_preferred: Date-like values the person cannot work

        Returns:
            The stored PreferenceSet

        Raises:
            ConfigurationError: If the email is unknown, a date cannot be
                parsed, or a date is both preferred and not preferred
        """
        if email not in self._preferences:
            raise ConfigurationError(f"Person with email {email} not found")

        prefs = PreferenceSet(
            preferred={normalize_date(d) for d in preferred},
            not_preferred={normalize_date(d) for d in not_preferred},
        )
        both = prefs.preferred & prefs.not_preferred
        if both:
            raise ConfigurationError(
                f"Dates marked both preferred and unavailable for {email}: {', '.join(sorted(both))}"
            )
        self._preferences[email] = prefs
        return prefs

    def preferences_for(self, email: str) -> PreferenceSet:
        return self._preferences.get(email, PreferenceSet())
