"""
Repository基础类
定义通用的数据访问接口和方法
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Type

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.log_messages import log_messages
from app.core.log_utils import get_logger
from app.utils.id_utils import generate_uuid

logger = get_logger(__name__)


class BaseRepository(ABC):
    """Repository基础类"""

    def __init__(self, db: AsyncSession):
        self.db = db

    @property
    @abstractmethod
    def model(self) -> Type[Any]:
        """返回Repository对应的模型类"""

    @property
    def model_name(self) -> str:
        return self.model.__name__

    async def get_by_id(self, record_id: str) -> Optional[Any]:
        """根据ID获取单个记录"""
        try:
            query = select(self.model).where(self.model.id == record_id)
            result = await self.db.execute(query)
            record = result.scalars().first()
        except Exception as e:
            logger.error(log_messages.DB_QUERY_FAILED,
                         operation_name="get_by_id",
                         record_id=record_id,
                         model_name=self.model_name,
                         exception=e)
            raise

        if record is None:
            logger.debug("记录不存在",
                         operation_name="get_by_id",
                         record_id=record_id,
                         model_name=self.model_name)
        return record

    async def create(self, **kwargs) -> Any:
        """创建新记录，未提供id时自动生成UUID"""
        kwargs.setdefault('id', generate_uuid())
        try:
            instance = self.model(**kwargs)
            self.db.add(instance)
            await self.db.commit()
            await self.db.refresh(instance)
        except Exception as e:
            await self.db.rollback()
            logger.error(log_messages.DB_UPDATE_FAILED,
                         operation_name="create",
                         model_name=self.model_name,
                         exception=e)
            raise

        logger.info(log_messages.DB_UPDATE_SUCCESS,
                    operation_name="create",
                    model_name=self.model_name,
                    record_id=instance.id)
        return instance

    async def update(self, record_id: str, **kwargs) -> Optional[Any]:
        """更新记录，记录不存在时返回None"""
        instance = await self.get_by_id(record_id)
        if instance is None:
            return None

        try:
            for key, value in kwargs.items():
                if hasattr(instance, key):
                    setattr(instance, key, value)
            await self.db.commit()
            await self.db.refresh(instance)
        except Exception as e:
            await self.db.rollback()
            logger.error(log_messages.DB_UPDATE_FAILED,
                         operation_name="update",
                         record_id=record_id,
                         model_name=self.model_name,
                         exception=e)
            raise

        logger.info(log_messages.DB_UPDATE_SUCCESS,
                    operation_name="update",
                    record_id=record_id,
                    model_name=self.model_name,
                    update_fields=list(kwargs.keys()))
        return instance

    async def delete(self, record_id: str) -> bool:
        """删除记录，记录不存在时返回False"""
        instance = await self.get_by_id(record_id)
        if instance is None:
            return False

        try:
            await self.db.delete(instance)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(log_messages.DB_UPDATE_FAILED,
                         operation_name="delete",
                         record_id=record_id,
                         model_name=self.model_name,
                         exception=e)
            raise

        logger.info(log_messages.DB_UPDATE_SUCCESS,
                    operation_name="delete",
                    record_id=record_id,
                    model_name=self.model_name)
        return True

    async def count(self, *conditions, **filters) -> int:
        """
        统计记录数量

        Args:
            *conditions: SQLAlchemy 条件表达式
            **filters: 字段等值过滤
        """
        query = select(func.count()).select_from(self.model)
        for condition in conditions:
            query = query.where(condition)
        for key, value in filters.items():
            if hasattr(self.model, key):
                query = query.where(getattr(self.model, key) == value)

        try:
            result = await self.db.execute(query)
        except Exception as e:
            logger.error(log_messages.DB_QUERY_FAILED,
                         operation_name="count",
                         model_name=self.model_name,
                         exception=e)
            raise
        return result.scalar() or 0
