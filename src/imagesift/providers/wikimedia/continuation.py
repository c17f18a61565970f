"""Continuation state for MediaWiki ``generator=images`` paging.

The Commons API has no page offsets, only a forward cursor
(``gimcontinue``). The provider therefore remembers the last query and the
cursor the API handed back for it:

  fresh       nothing searched yet
  continuing  a cursor is held for ``query``; the next call resumes from it
  exhausted   the API returned no cursor for ``query``; further calls with
              the same term are answered locally with an empty page

Values are immutable. The provider builds the next state while a request is
in flight and only stores it once the whole response has been handled, so a
failed call leaves the stored state untouched.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class PagingPhase(StrEnum):
    FRESH = "fresh"
    CONTINUING = "continuing"
    EXHAUSTED = "exhausted"


class ContinuationState(BaseModel):
    """Previous query plus the cursor returned for it."""

    model_config = ConfigDict(frozen=True)

    phase: PagingPhase = Field(default=PagingPhase.FRESH)
    query: str | None = Field(default=None, description="Term of the last successful search")
    token: str | None = Field(default=None, description="gimcontinue cursor for the next page")

    def is_exhausted_for(self, search_term: str) -> bool:
        return self.phase is PagingPhase.EXHAUSTED and self.query == search_term

    def start(self, search_term: str) -> ContinuationState:
        """State to issue the next request for *search_term* from.

        A different term drops the cursor of the previous one.
        """
        if search_term == self.query:
            return self
        return ContinuationState(query=search_term)

    def advance(self, token: str | None) -> ContinuationState:
        """State after a response carrying *token* (``None`` on the last page)."""
        if token:
            return ContinuationState(phase=PagingPhase.CONTINUING, query=self.query, token=token)
        return ContinuationState(phase=PagingPhase.EXHAUSTED, query=self.query)
