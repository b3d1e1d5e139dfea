"""
Area Management

Creating areas, editing their keywords and deleting them.

DESIGN DECISION: Keyword hygiene is enforced here, at the edge, and
not in the matcher. The matcher only guarantees that blank keywords
never match; rejecting duplicates and blanks is this service's job.

Deleting an area never touches expenses. They simply stop matching it.
"""

from typing import Optional
from uuid import UUID

import structlog

from finance_tracker.audit import AuditLogger
from finance_tracker.config import get_settings
from finance_tracker.matching import normalize
from finance_tracker.models.records import Area
from finance_tracker.services.storage import AreaStorageInterface, NotFoundError

# Palette offered for new areas, in order
AREA_COLORS = [
    "#22c55e",  # green
    "#3b82f6",  # blue
    "#a855f7",  # purple
    "#ec4899",  # pink
    "#f97316",  # orange
    "#14b8a6",  # teal
    "#eab308",  # yellow
    "#ef4444",  # red
]


class AreaError(Exception):
    """Base exception for area management."""
    pass


class AreaValidationError(AreaError):
    """Area name or keyword is not acceptable."""
    pass


class DuplicateKeywordError(AreaValidationError):
    """Keyword already exists on the area (compared case-insensitively)."""
    pass


def next_area_color(existing: list[Area]) -> str:
    """First palette color no existing area uses; wraps to the first color."""
    used = {area.color.lower() for area in existing}
    return next((c for c in AREA_COLORS if c not in used), AREA_COLORS[0])


class AreaService:
    """
    Edits a user's areas through the storage interface.

    All edits are audited when an AuditLogger is configured.
    """

    def __init__(
        self,
        storage: AreaStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger
        self._settings = get_settings().tracker
        self._logger = structlog.get_logger(__name__)

    async def _get(self, area_id: str) -> Area:
        area = await self._storage.get_area(area_id)
        if area is None:
            raise NotFoundError(f"Area not found: {area_id}")
        return area

    async def create_area(
        self,
        user_id: str,
        name: str,
        color: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> Area:
        """
        Create an empty area.

        New areas get a priority above every existing area of the user,
        so the most recently created area wins conflicts.

        Raises:
            AreaValidationError: If the name is blank
        """
        name = name.strip()
        if not name:
            raise AreaValidationError("Area name must not be empty")

        existing = await self._storage.list_areas(user_id)
        area = Area(
            name=name,
            color=color or next_area_color(existing),
            keywords=[],
            priority=len(existing) + 1,
            user_id=user_id,
        )
        await self._storage.save_area(area)
        self._logger.info("area_created", area_id=area.id, priority=area.priority)

        if self._audit_logger:
            await self._audit_logger.log_area_created(
                area_id=area.id,
                user_id=user_id,
                name=area.name,
                priority=area.priority,
                correlation_id=correlation_id,
            )
        return area

    async def add_keyword(
        self,
        area_id: str,
        keyword: str,
        correlation_id: Optional[UUID] = None,
    ) -> Area:
        """
        Attach a keyword to an area.

        Raises:
            NotFoundError: If the area doesn't exist
            AreaValidationError: If the keyword is blank (also after accents
                are stripped), too long, or the area already has too many keywords
            DuplicateKeywordError: If the area already has the keyword,
                ignoring case
        """
        area = await self._get(area_id)
        keyword = keyword.strip()

        reason = None
        error_cls = AreaValidationError
        if not normalize(keyword).strip():
            reason = "Keyword must not be empty"
        elif len(keyword) > self._settings.max_keyword_length:
            reason = f"Keyword longer than {self._settings.max_keyword_length} characters"
        elif any(k.lower() == keyword.lower() for k in area.keywords):
            reason = "Keyword already exists in this area"
            error_cls = DuplicateKeywordError
        elif len(area.keywords) >= self._settings.max_keywords_per_area:
            reason = f"Area already has {self._settings.max_keywords_per_area} keywords"

        if reason:
            if self._audit_logger:
                await self._audit_logger.log_keyword_rejected(
                    area_id=area.id,
                    user_id=area.user_id,
                    keyword=keyword,
                    reason=reason,
                    correlation_id=correlation_id,
                )
            raise error_cls(reason)

        area.keywords.append(keyword)
        await self._storage.save_area(area)

        if self._audit_logger:
            await self._audit_logger.log_keyword_added(
                area_id=area.id,
                user_id=area.user_id,
                keyword=keyword,
                correlation_id=correlation_id,
            )
        return area

    async def remove_keyword(
        self,
        area_id: str,
        keyword: str,
        correlation_id: Optional[UUID] = None,
    ) -> Area:
        """
        Detach a keyword (exact match). Unknown keywords are ignored.

        Raises:
            NotFoundError: If the area doesn't exist
        """
        area = await self._get(area_id)
        if keyword not in area.keywords:
            return area

        area.keywords = [k for k in area.keywords if k != keyword]
        await self._storage.save_area(area)

        if self._audit_logger:
            await self._audit_logger.log_keyword_removed(
                area_id=area.id,
                user_id=area.user_id,
                keyword=keyword,
                correlation_id=correlation_id,
            )
        return area

    async def delete_area(
        self,
        area_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Delete an area. Expenses it matched are kept and become unassigned
        unless another area matches them.

        Raises:
            NotFoundError: If the area doesn't exist
        """
        area = await self._get(area_id)
        deleted = await self._storage.delete_area(area_id)
        self._logger.info("area_deleted", area_id=area_id)

        if self._audit_logger:
            await self._audit_logger.log_area_deleted(
                area_id=area.id,
                user_id=area.user_id,
                name=area.name,
                correlation_id=correlation_id,
            )
        return deleted
