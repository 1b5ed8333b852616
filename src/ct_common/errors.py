"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Collection (price feeds, snapshot validation)
  2xxx: Response ledger (authorization, input)
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Collection ---

class InvalidPriceError(AppError):
    def __init__(self, source: str, price: int) -> None:
        super().__init__(1001, f"Invalid price from {source}: {price}", 422)


class StaleDataError(AppError):
    def __init__(self, source: str, updated_at: int, now: int) -> None:
        super().__init__(
            1002,
            f"Stale data from {source}: updated_at={updated_at}, now={now}",
            422,
        )


class OracleDisagreementError(AppError):
    def __init__(self, divergence_bps: int, tolerance_bps: int) -> None:
        super().__init__(
            1003,
            f"Price sources disagree: divergence {divergence_bps} bps > {tolerance_bps} bps",
            422,
        )


class PriceFeedUnavailableError(AppError):
    def __init__(self, source: str, detail: str) -> None:
        super().__init__(1004, f"Price feed {source} unavailable: {detail}", 502)


# --- 2xxx: Response ledger ---

class UnauthorizedError(AppError):
    def __init__(self, caller: str) -> None:
        super().__init__(2001, f"Caller {caller} is not an authorized detector", 403)


class InvalidInputError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2002, f"Invalid input: {detail}", 422)


class NotOwnerError(AppError):
    def __init__(self, caller: str) -> None:
        super().__init__(2003, f"Caller {caller} is not the ledger owner", 403)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(2004, "Invalid or expired token", 401)


# --- 9xxx: System ---

class RateLimitError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Rate limit exceeded", 429)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class DeploymentConfigError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9003, f"Deployment configuration error: {detail}", 500)
