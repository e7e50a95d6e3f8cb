"""
Custom exception classes and error handlers
Provides consistent error responses across the application
"""

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

class EwasteRewardsException(HTTPException):
    """Base exception class for the e-waste rewards application"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code

class BadRequestException(EwasteRewardsException):
    """400 Bad Request"""

    def __init__(self, detail: str, error_code: str = "BAD_REQUEST"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code
        )

class UnauthorizedException(EwasteRewardsException):
    """401 Unauthorized"""

    def __init__(self, detail: str = "Unauthorized", error_code: str = "UNAUTHORIZED"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code=error_code
        )

class ForbiddenException(EwasteRewardsException):
    """403 Forbidden"""

    def __init__(self, detail: str = "Forbidden", error_code: str = "FORBIDDEN"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code=error_code
        )

class NotFoundException(EwasteRewardsException):
    """404 Not Found"""

    def __init__(self, detail: str = "Not found", error_code: str = "NOT_FOUND"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code=error_code
        )

class ConflictException(EwasteRewardsException):
    """409 Conflict"""

    def __init__(self, detail: str, error_code: str = "CONFLICT"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code=error_code
        )

class ValidationException(EwasteRewardsException):
    """422 Unprocessable Entity"""

    def __init__(self, detail: str, error_code: str = "VALIDATION_ERROR"):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code=error_code
        )

class PersistenceException(EwasteRewardsException):
    """503 - storage unreachable or a write could not be committed"""

    def __init__(
        self,
        detail: str = "Storage temporarily unavailable",
        error_code: str = "PERSISTENCE_ERROR"
    ):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            error_code=error_code
        )

# Business logic exceptions
class InsufficientBalanceException(BadRequestException):
    """Computed balance is below the reward cost"""

    def __init__(self, balance: int, cost: int):
        super().__init__(
            detail=f"Insufficient points: balance {balance}, reward costs {cost}.",
            error_code="INSUFFICIENT_BALANCE"
        )
        self.balance = balance
        self.cost = cost

class NoPointsToRedeemException(BadRequestException):
    """Full redemption requested with a zero balance"""

    def __init__(self, detail: str = "No points available to redeem"):
        super().__init__(
            detail=detail,
            error_code="NO_POINTS_TO_REDEEM"
        )

class UnknownRewardException(NotFoundException):
    """Reward id does not resolve to an available catalog entry"""

    def __init__(self, reward_id: int):
        super().__init__(
            detail=f"Reward {reward_id} is not available",
            error_code="UNKNOWN_REWARD"
        )
        self.reward_id = reward_id

class ReportNotFoundException(NotFoundException):
    """Report lookup failed"""

    def __init__(self, report_id: int):
        super().__init__(
            detail=f"Report {report_id} not found",
            error_code="REPORT_NOT_FOUND"
        )
        self.report_id = report_id

class InvalidStatusTransitionException(ConflictException):
    """Report status change not allowed by the state machine"""

    def __init__(self, current: str, requested: str):
        super().__init__(
            detail=f"Cannot move report from {current} to {requested}",
            error_code="INVALID_STATUS_TRANSITION"
        )

class NoWasteDetectedException(BadRequestException):
    """Classifier reported no e-waste in the image"""

    def __init__(self, detail: str = "No electronic waste detected in the submission"):
        super().__init__(
            detail=detail,
            error_code="NO_WASTE_DETECTED"
        )

async def ewaste_exception_handler(request: Request, exc: EwasteRewardsException) -> JSONResponse:
    """Render application exceptions with their error code"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.error_code,
                "message": exc.detail,
                "request_id": getattr(request.state, "request_id", None)
            }
        },
        headers=exc.headers
    )

async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler; internal details stay in the log"""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "request_id": getattr(request.state, "request_id", None)
            }
        }
    )
