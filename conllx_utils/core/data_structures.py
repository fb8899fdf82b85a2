# conllx_utils/core/data_structures.py
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from conllx_utils.config import PLACEHOLDER


class ValuePair(BaseModel):
    """Значения одного слоя в двух выровненных токенах."""
    first: Optional[str]
    second: Optional[str]

    @property
    def differs(self) -> bool:
        return self.first != self.second

    def columns(self) -> List[str]:
        return [display(self.first), display(self.second)]


class DiffRow(BaseModel):
    """
    Строка отчёта compare для одного токена.
    Позиция 1-based, как в выводе.
    """
    position: int
    shown: List[Optional[str]] = Field(default_factory=list)
    pairs: List[ValuePair] = Field(default_factory=list)

    @model_validator(mode='after')
    def check_position(self):
        if self.position < 1:
            raise ValueError(f"Row position must be 1-based, got {self.position}")
        return self


def display(value: Optional[str]) -> str:
    return PLACEHOLDER if value is None else value
