"""Quote endpoints: equities through the shared cache, crypto by coin id."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from papertrade.api.deps import get_crypto_service, get_quote_cache
from papertrade.api.schemas.quote import (
    PriceResponse,
    BatchPriceResponse,
    CryptoPriceResponse,
    CryptoPricesResponse,
)
from papertrade.core.exceptions import ValidationError
from papertrade.services import CryptoPriceService, QuoteCache

router = APIRouter(prefix="/quotes", tags=["quotes"])


def _split(raw: Optional[str]) -> list[str]:
    return [s.strip() for s in (raw or "").split(",") if s.strip()]


@router.get("", response_model=BatchPriceResponse)
def get_prices(
    symbols: str = Query(..., description="Comma-separated symbols, e.g. AAPL,MSFT"),
    quote_cache: QuoteCache = Depends(get_quote_cache),
) -> BatchPriceResponse:
    """
    Price several symbols under the provider call budget.

    Symbols that could not be priced in time come back in missing_symbols.
    """
    requested = _split(symbols)
    if not requested:
        raise ValidationError("At least one symbol is required")
    batch = quote_cache.get_prices(requested)
    return BatchPriceResponse(
        prices=[PriceResponse.from_quote(q) for q in batch.prices.values()],
        stale_symbols=batch.stale_symbols,
        missing_symbols=batch.missing_symbols,
        is_partial=batch.is_partial,
    )


@router.get("/crypto", response_model=CryptoPricesResponse)
def get_crypto_prices(
    ids: str = Query(..., description="Comma-separated coin ids, e.g. bitcoin,ethereum"),
    service: CryptoPriceService = Depends(get_crypto_service),
) -> CryptoPricesResponse:
    """USD spot prices for crypto coins; unknown ids are listed in missing_ids."""
    requested = list(dict.fromkeys(c.lower() for c in _split(ids)))
    quotes = service.get_prices(requested)
    return CryptoPricesResponse(
        prices=[CryptoPriceResponse.from_quote(quotes[c]) for c in requested if c in quotes],
        missing_ids=[c for c in requested if c not in quotes],
    )


@router.get("/{symbol}", response_model=PriceResponse)
def get_price(
    symbol: str,
    quote_cache: QuoteCache = Depends(get_quote_cache),
) -> PriceResponse:
    """Current price for one symbol; is_stale marks a fallback to an expired cache entry."""
    return PriceResponse.from_quote(quote_cache.get_price(symbol))
