"""Key-value rows backing the durable ledger store."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel


class AppSetting(SQLModel, table=True):
    """One string-keyed entry; ``value`` holds serialized ledger state."""

    __tablename__: ClassVar[str] = "app_setting"

    key: str = Field(primary_key=True, max_length=64)
    value: str = Field(sa_column=Column(Text, nullable=False))
    description: Optional[str] = Field(default=None, max_length=255)
