"""
章节资源相关的Pydantic模型
"""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from app.schemas.common import CamelModel


class ChapterResourceResponse(CamelModel):
    """章节资源响应"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )

    id: str
    chapter_id: str
    title: str
    description: Optional[str] = None
    type: str
    resource_type: str
    url: Optional[str] = None
    file_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
