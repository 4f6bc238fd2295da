import logging
import uuid
from supabase import Client
from app.core.rows import first_row
from app.modules.cms_pages.schemas import CmsPageResponse, PageViewResponse
from fastapi import HTTPException

logger = logging.getLogger(__name__)

PUBLISHED = "published"


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
        return True
    except ValueError:
        return False


class CmsPageService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_page(self, page_id: str) -> CmsPageResponse:
        """Published page by id or slug"""
        column = "id" if _is_uuid(page_id) else "slug"
        try:
            page = first_row(
                self.supabase.table("cms_pages")
                .select("*")
                .eq(column, page_id)
                .eq("status", PUBLISHED)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Error fetching CMS page {page_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to get page")
        if not page:
            raise HTTPException(status_code=404, detail="Page not found")
        return CmsPageResponse(**page)

    def record_view(self, page_id: str) -> PageViewResponse:
        """Bump the view counter. Best-effort: failures are logged, not raised."""
        if not _is_uuid(page_id):
            raise HTTPException(status_code=400, detail="Invalid page id")
        try:
            result = self.supabase.rpc("increment_page_views", {"p_page_id": page_id}).execute()
            count = result.data if result is not None else None
            return PageViewResponse(success=True, view_count=count if isinstance(count, int) else None)
        except Exception as e:
            logger.warning(f"Failed to record view for page {page_id}: {e}")
            return PageViewResponse(success=False)
