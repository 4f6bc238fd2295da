from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class CmsPageResponse(BaseModel):
    id: str
    title: str
    slug: str
    content: str = ""
    page_type: Optional[str] = "page"
    status: Optional[str] = None
    meta_description: Optional[str] = None
    featured_image_url: Optional[str] = None
    is_featured: bool = False
    view_count: int = 0
    publish_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PageViewResponse(BaseModel):
    success: bool
    view_count: Optional[int] = None
