"""Application-level exceptions."""

from decimal import Decimal


def _money(value: Decimal) -> str:
    return f"${value:,.2f}"


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class UnauthorizedError(AppError):
    """Raised when a bearer credential is missing or invalid."""

    status_code = 401

    def __init__(self, message: str = "Missing or invalid credentials"):
        super().__init__(message, code="UNAUTHORIZED")


class InsufficientBalanceError(AppError):
    """Raised when a buy costs more than the available cash."""

    def __init__(self, required: Decimal, available: Decimal):
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient balance: order requires {_money(required)}, "
            f"available {_money(available)}",
            code="INSUFFICIENT_BALANCE",
        )


class NoSuchPositionError(AppError):
    """Raised when selling a symbol the user does not hold."""

    status_code = 404

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"No position held in {symbol}", code="NO_SUCH_POSITION")


class InsufficientSharesError(AppError):
    """Raised when attempting to sell more shares than owned."""

    def __init__(self, symbol: str, requested: int, available: int):
        self.symbol = symbol
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient shares of {symbol}: requested {requested}, held {available}",
            code="INSUFFICIENT_SHARES",
        )


class InvalidSymbolError(AppError):
    """Raised when the quote provider does not recognise a symbol."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Unknown symbol: {symbol}", code="INVALID_SYMBOL")


class QuoteUnavailableError(AppError):
    """Raised when no price can be obtained; the request may be retried later."""

    status_code = 503

    def __init__(self, symbol: str, reason: str = "quote provider unavailable"):
        self.symbol = symbol
        super().__init__(
            f"Price for {symbol} is temporarily unavailable ({reason}); please retry shortly",
            code="QUOTE_UNAVAILABLE",
        )


class ConcurrentModificationError(AppError):
    """Raised when an optimistic update keeps losing to concurrent writers."""

    status_code = 409

    def __init__(self, resource: str, identifier: str):
        super().__init__(
            f"{resource} {identifier} was modified concurrently; please retry",
            code="CONCURRENT_MODIFICATION",
        )


class RateLimitedError(Exception):
    """Provider signal: the upstream call budget is exhausted."""


class QuoteProviderError(Exception):
    """Provider signal: the upstream is unreachable or returned garbage."""
