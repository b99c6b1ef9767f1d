"""
Typed view of the signed session cookie.

Handlers never read ``request.session`` directly: they receive a
SessionContext, work with typed values and write it back once at the end
of the request. Only the keys below are recognized.
"""

from dataclasses import dataclass, field, replace
from typing import Any, MutableMapping, Optional

from bookshelf.domain.services import load_stored_preference
from bookshelf.domain.value_objects import SortFilterPreference

SESSION_USER_KEY = "User"
SESSION_SORT_KEY = "SortBy"
SESSION_FILTER_KEY = "Filter"


@dataclass(frozen=True)
class SessionContext:
    """Signed-in user and sort/filter preference for one request."""

    user: Optional[str] = None
    preference: SortFilterPreference = field(default_factory=SortFilterPreference)

    @classmethod
    def from_session(cls, session: MutableMapping[str, Any]) -> "SessionContext":
        user = session.get(SESSION_USER_KEY)
        return cls(
            user=user if isinstance(user, str) and user else None,
            preference=load_stored_preference(
                session.get(SESSION_SORT_KEY),
                session.get(SESSION_FILTER_KEY),
            ),
        )

    def with_preference(self, preference: SortFilterPreference) -> "SessionContext":
        return replace(self, preference=preference)

    def write_to(self, session: MutableMapping[str, Any]) -> None:
        """Persist this context into the session mapping."""
        if self.user is None:
            session.pop(SESSION_USER_KEY, None)
        else:
            session[SESSION_USER_KEY] = self.user
        session[SESSION_SORT_KEY] = self.preference.sort_by.value
        session[SESSION_FILTER_KEY] = self.preference.filter.value
