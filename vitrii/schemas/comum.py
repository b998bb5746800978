# -*- coding: utf-8 -*-
"""
Base dos schemas Pydantic e envelope das respostas ({"data": ..., "message": ...}).
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class VitriiSchema(BaseModel):
    """JSON em camelCase (como o frontend envia), atributos Python em snake_case."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class Resposta(BaseModel, Generic[T]):
    data: T
    message: Optional[str] = None
