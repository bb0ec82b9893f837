"""
Display currency preference, stored client-side in a cookie.
"""

from fastapi import APIRouter, Depends, Response, status
from stayhub.services.currency import CurrencyConverter, get_currency_converter, persist_currency
from stayhub.schemas.currency import CurrencyUpdate, CurrencyResponse
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/currency", tags=["Currency"])


@router.get(
    "",
    response_model=CurrencyResponse,
    status_code=status.HTTP_200_OK,
    summary="Selected currency",
    description="Currency used for display prices; KES unless changed"
)
async def get_currency(converter: CurrencyConverter = Depends(get_currency_converter)) -> CurrencyResponse:
    return CurrencyResponse(currency=converter.currency, usd_exchange_rate=float(converter.rate))


@router.put(
    "",
    response_model=CurrencyResponse,
    status_code=status.HTTP_200_OK,
    summary="Change currency",
    description="Persist the display currency in the currency cookie"
)
async def set_currency(payload: CurrencyUpdate, response: Response) -> CurrencyResponse:
    persist_currency(response, payload.currency)
    converter = CurrencyConverter(payload.currency)
    logger.debug(f"Currency preference set to {payload.currency.value}")
    return CurrencyResponse(currency=converter.currency, usd_exchange_rate=float(converter.rate))
