"""
Pydantic schemas for the display currency preference.
"""

from pydantic import BaseModel, Field
from typing import List
from stayhub.services.currency import Currency


class CurrencyUpdate(BaseModel):
    currency: Currency = Field(..., description="KES or USD", examples=["USD"])


class CurrencyResponse(BaseModel):
    currency: Currency
    usd_exchange_rate: float = Field(..., description="USD per 1 KES", examples=[0.0078])
    supported: List[Currency] = Field(default_factory=lambda: list(Currency))
