"""
API路由聚合模块
将所有v1版本的路由统一注册

路由管理规范：
1. 所有前缀统一在router.py中管理
2. Tags统一使用中文，与端点文件定义保持一致
"""

from fastapi import APIRouter

from app.api.v1.endpoints import analytics, chapter_resources, upload

api_router = APIRouter()

# ==================== PDF上传路由 ====================
api_router.include_router(upload.router, prefix="/upload", tags=["PDF上传"])

# ==================== 统计路由 ====================
api_router.include_router(analytics.router, prefix="/analytics", tags=["统计"])

# ==================== 章节资源路由 ====================
api_router.include_router(
    chapter_resources.router, prefix="/chapter-resources", tags=["章节资源"]
)
