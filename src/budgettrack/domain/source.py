"""Spending source domain service."""

import uuid
from typing import Iterable, Optional

from budgettrack.store.base import LedgerStore
from budgettrack.domain.entities import SourceType, SpendingSource
from budgettrack.domain.errors import NotFoundError, ValidationError, source_not_found


def normalize_default_flag(
    sources: Iterable[SpendingSource], default_id: Optional[str] = None
) -> tuple[SpendingSource, ...]:
    """Recompute ``is_default`` across the whole collection.

    The source with ``default_id`` becomes the only default. Without an id the
    first source already flagged default wins, falling back to the first
    source. An empty collection stays empty.
    """
    sources = tuple(sources)
    if not sources:
        return sources

    if default_id is None:
        flagged = [s for s in sources if s.is_default]
        default_id = flagged[0].id if flagged else sources[0].id

    return tuple(
        s if s.is_default == (s.id == default_id) else SpendingSource(
            id=s.id, name=s.name, type=s.type, is_default=s.id == default_id
        )
        for s in sources
    )


class SourceService:
    """Service for managing spending sources."""

    def __init__(self, store: LedgerStore):
        """Initialize source service.

        Args:
            store: Ledger store instance
        """
        self.store = store

    def create_source(
        self, name: str, source_type: SourceType | str, is_default: bool = False
    ) -> SpendingSource:
        """Create a spending source.

        Args:
            name: Display name
            source_type: Bank, Card or Cash
            is_default: Make the new source the default

        Returns:
            The created source

        Raises:
            ValidationError: If name is blank or type is unknown
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Source name must not be empty")
        try:
            source_type = SourceType(source_type)
        except ValueError:
            raise ValidationError(f"Unknown source type '{source_type}'")

        source = SpendingSource(
            id=str(uuid.uuid4()), name=name, type=source_type, is_default=False
        )
        sources = self.store.snapshot().sources + (source,)
        default_id = source.id if is_default or len(sources) == 1 else None
        self.store.update(sources=normalize_default_flag(sources, default_id))
        return self.require_source(source.id)

    def get_source(self, source_id: str) -> Optional[SpendingSource]:
        """Get source by ID, or None if not found."""
        for source in self.store.snapshot().sources:
            if source.id == source_id:
                return source
        return None

    def require_source(self, source_id: str) -> SpendingSource:
        """Get source by ID.

        Raises:
            NotFoundError: If source doesn't exist
        """
        source = self.get_source(source_id)
        if source is None:
            raise NotFoundError(source_not_found(source_id))
        return source

    def resolve_source(self, source: str) -> SpendingSource:
        """Resolve a source by ID or, failing that, by exact name."""
        found = self.get_source(source)
        if found is not None:
            return found
        for candidate in self.store.snapshot().sources:
            if candidate.name == source:
                return candidate
        raise NotFoundError(source_not_found(source))

    def list_sources(self) -> list[SpendingSource]:
        """List all sources in creation order."""
        return list(self.store.snapshot().sources)

    def set_default_source(self, source_id: str) -> None:
        """Make one source the default, clearing the flag on all others.

        Raises:
            NotFoundError: If source doesn't exist
        """
        self.require_source(source_id)
        sources = self.store.snapshot().sources
        self.store.update(sources=normalize_default_flag(sources, source_id))

    def get_default_source(self) -> Optional[SpendingSource]:
        """Return the default source, else the first source, else None."""
        sources = self.store.snapshot().sources
        for source in sources:
            if source.is_default:
                return source
        return sources[0] if sources else None

    def default_source_id(self) -> str:
        """Return the default source ID or an empty string."""
        source = self.get_default_source()
        return source.id if source is not None else ""
