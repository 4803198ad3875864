"""
Content Page Editor - Content Store

In-memory cache of what the UI has fetched from the content API:

- the page list shown in the sidebar (server order)
- at most one selected page loaded into the editor

The cache is only changed after a remote call fully succeeds: created pages
are appended, updated pages replace their entry in place, deleted pages are
removed.  Read failures are recorded on the store; write failures are
recorded where relevant and re-raised to the caller.

Detail loads carry a generation number so a slow response for an older
selection never overwrites a newer one.  Request handlers that serve one
particular page use ``load()`` and ``update()`` instead, which take the page
id explicitly and never read the shared selection.
"""

from typing import Any, Dict, List, Optional

from loguru import logger

from src.content_client import ApiError, ContentService
from src.models import Content, CreateContentDTO, UpdateContentDTO


class ContentStore:
    """Sidebar list + selected page, backed by a :class:`ContentService`."""

    def __init__(self, service: ContentService):
        self.service = service

        # Sidebar list
        self.contents: List[Content] = []
        self.loading = False
        self.loaded = False
        self.error: Optional[Exception] = None

        # Selected page
        self.selected_id: Optional[int] = None
        self.content: Optional[Content] = None
        self.content_loading = False
        self.content_error: Optional[Exception] = None
        self._generation = 0

    # ------------------------------------------------------------------
    # List
    # ------------------------------------------------------------------
    async def refresh(self) -> List[Content]:
        """Refetch the page list.  On failure the previous list is kept."""
        self.loading = True
        self.error = None
        try:
            contents = await self.service.get_all()
        except Exception as e:
            logger.error("❌ Failed to load page list: {}", e)
            self.error = e
            return self.contents
        finally:
            self.loading = False

        self.contents = contents
        self.loaded = True
        logger.debug("📋 Loaded {} pages", len(contents))
        return self.contents

    async def ensure_loaded(self) -> List[Content]:
        if not self.loaded:
            await self.refresh()
        return self.contents

    async def create(self, data: CreateContentDTO) -> Content:
        new_content = await self.service.create(data)
        self.contents.append(new_content)
        return new_content

    async def delete(self, content_id: int) -> None:
        await self.service.delete(content_id)
        self.contents = [c for c in self.contents if c.id != content_id]

        # Deleting the open page closes the editor
        if self.selected_id == content_id:
            self._generation += 1
            self.selected_id = None
            self.content = None
            self.content_error = None

    def update_in_list(self, updated: Content) -> None:
        self.contents = [updated if c.id == updated.id else c for c in self.contents]

    async def load(self, content_id: int) -> Content:
        """Fetch one page without touching the shared selection."""
        return await self.service.get_by_id(content_id)

    async def update(self, content_id: int, data: UpdateContentDTO) -> Content:
        """
        Save *data* to page *content_id* and patch the sidebar entry.

        The open page is patched too when it is the one being saved.
        """
        updated = await self.service.update(content_id, data)
        self.update_in_list(updated)
        if self.selected_id == content_id:
            self.content = updated
        return updated

    # ------------------------------------------------------------------
    # Selected page
    # ------------------------------------------------------------------
    async def select(self, content_id: Optional[int]) -> Optional[Content]:
        """
        Make *content_id* the open page and load it.

        ``None`` clears the selection.  If another ``select()`` starts while
        this one is waiting on the network, this result is dropped.
        """
        self._generation += 1
        generation = self._generation
        self.selected_id = content_id

        if content_id is None:
            self.content = None
            self.content_error = None
            self.content_loading = False
            return None

        self.content_loading = True
        self.content_error = None
        try:
            content = await self.load(content_id)
        except Exception as e:
            if generation != self._generation:
                logger.debug("⏭️  Ignoring stale failure for page {}", content_id)
                return self.content
            logger.warning("⚠️  Failed to load page {}: {}", content_id, e)
            self.content_error = e
            self.content = None
            self.content_loading = False
            return None

        if generation != self._generation:
            logger.debug("⏭️  Ignoring stale response for page {}", content_id)
            return self.content

        self.content = content
        self.content_loading = False
        return content

    async def update_selected(self, data: UpdateContentDTO) -> Content:
        """Save *data* to the open page and patch the sidebar entry."""
        if self.selected_id is None:
            raise ValueError("Content ID is required")

        self.content_loading = True
        self.content_error = None
        try:
            return await self.update(self.selected_id, data)
        except Exception as e:
            self.content_error = e
            raise
        finally:
            self.content_loading = False

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------
    @property
    def not_found(self) -> bool:
        """True when the selected page no longer exists on the server."""
        return isinstance(self.content_error, ApiError) and self.content_error.status == 404

    def snapshot(self) -> Dict[str, Any]:
        """Return a JSON-friendly summary of the store state."""
        return {
            "loaded": self.loaded,
            "loading": self.loading,
            "count": len(self.contents),
            "error": str(self.error) if self.error else None,
            "selected_id": self.selected_id,
            "content_loading": self.content_loading,
        }
