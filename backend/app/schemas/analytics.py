"""
统计相关的Pydantic模型
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AppOpenRequest(BaseModel):
    """应用打开上报请求"""
    platform: Optional[str] = None


class AppOpenResponse(BaseModel):
    """应用打开上报响应"""
    success: bool = True


class AppOpenStatsResponse(BaseModel):
    """应用打开统计"""
    model_config = ConfigDict(populate_by_name=True)

    total_opens: int = Field(alias="totalOpens")
    app_opens: int = Field(alias="appOpens")
    web_opens: int = Field(alias="webOpens")
    last_24_hours: int = Field(alias="last24Hours")
    last_7_days: int = Field(alias="last7Days")
    last_30_days: int = Field(alias="last30Days")
