from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.cms_pages.schemas import CmsPageResponse, PageViewResponse
from app.modules.cms_pages.service import CmsPageService
from supabase import Client

router = APIRouter(prefix="/cms-pages", tags=["cms-pages"])


def get_cms_page_service(supabase: Client = Depends(get_service_supabase)) -> CmsPageService:
    return CmsPageService(supabase)


@router.get("/{page_id}", response_model=CmsPageResponse)
async def get_cms_page(
    page_id: str,
    service: CmsPageService = Depends(get_cms_page_service)
):
    """Public: published page or news article by id or slug"""
    return service.get_page(page_id)


@router.post("/{page_id}/views", response_model=PageViewResponse)
async def record_cms_page_view(
    page_id: str,
    service: CmsPageService = Depends(get_cms_page_service)
):
    return service.record_view(page_id)
