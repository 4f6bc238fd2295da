# Supabase table: cms_pages

"""
cms_pages:
- id: uuid (primary key)
- title: text
- slug: text (unique)
- content: text
- page_type: text (page | news | ...)
- status: text (draft | published)
- meta_description, featured_image_url: text (nullable)
- is_featured: boolean
- view_count: integer
- publish_date, created_at, updated_at: timestamp

RPC:
- increment_page_views(p_page_id uuid) -> integer (new view count)
"""
