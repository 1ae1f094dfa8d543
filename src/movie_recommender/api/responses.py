"""Response envelopes and outcome-to-HTTP mapping."""

from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse

from ..core.models import (
    BlockReason,
    ContentBlocked,
    CycleReset,
    MovieInfo,
    Recommendation,
    RecommendationFailed,
    RecommendationOutcome,
    ScreeningResult,
    SecurityBlocked,
)

SCREENING_PASSED_REASONING = "All content is appropriate."
SCREENING_FAILED_REASONING = "Internal server error."
SCREENING_FAILED_SUGGESTIONS = ["Please try again later."]


def api_success(data: Any) -> Dict[str, Any]:
    """Build a success envelope."""
    return {"success": True, "data": data}


def api_error(
    message: str, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Build an error envelope; absent code and details are omitted."""
    error: Dict[str, Any] = {"message": message}
    if code is not None:
        error["code"] = code
    if details is not None:
        error["details"] = details
    return {"success": False, "error": error}


def error_response(
    status_code: int,
    message: str,
    code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=api_error(message, code, details))


def movie_info_payload(info: MovieInfo) -> Dict[str, Any]:
    """Serialize scraped movie facts, leaving out fields that were not found."""
    return info.model_dump(exclude_none=True)


def recommendation_response(outcome: RecommendationOutcome) -> JSONResponse:
    """Map a recommendation outcome onto its HTTP response.

    Args:
        outcome: Result of the recommendation flow.

    Returns:
        JSON response with the matching status code.
    """
    if isinstance(outcome, Recommendation):
        return JSONResponse(
            api_success(
                {
                    "recommendation": outcome.title,
                    "reasoning": outcome.reasoning,
                    "genre": outcome.genre,
                    "year": outcome.year,
                }
            )
        )

    if isinstance(outcome, CycleReset):
        return JSONResponse(
            api_success(
                {
                    "recommendation": outcome.message,
                    "reasoning": outcome.reasoning,
                    "genre": "Various",
                    "year": "Various",
                }
            )
        )

    if isinstance(outcome, SecurityBlocked):
        return error_response(
            403,
            outcome.reasoning,
            "SECURITY_BLOCKED",
            {"blockedContent": outcome.blocked_items, "suggestions": outcome.suggestions},
        )

    if isinstance(outcome, ContentBlocked):
        if outcome.reason is BlockReason.MISSING_DESCRIPTION:
            return error_response(400, outcome.reasoning, BlockReason.MISSING_DESCRIPTION.value)
        return error_response(
            403,
            outcome.reasoning,
            BlockReason.CONTENT_BLOCKED.value,
            {"blockedContent": outcome.blocked_items, "suggestions": outcome.suggestions},
        )

    if isinstance(outcome, RecommendationFailed):
        return error_response(500, outcome.message, "INTERNAL_ERROR")

    raise TypeError(f"Unknown recommendation outcome: {type(outcome).__name__}")


def screening_response(result: ScreeningResult) -> JSONResponse:
    """Map a screening result onto the guardrail endpoint response."""
    blocked = result.blocked
    if blocked is None:
        return JSONResponse(
            {
                "isValid": True,
                "reasoning": SCREENING_PASSED_REASONING,
                "blockedContent": [],
                "suggestions": [],
                "movieInfos": [movie_info_payload(info) for info in result.movie_infos],
            }
        )

    status_code = 400 if blocked.reason is BlockReason.MISSING_DESCRIPTION else 403
    return JSONResponse(
        status_code=status_code,
        content={
            "isValid": False,
            "reasoning": blocked.reasoning,
            "blockedContent": blocked.blocked_items,
            "suggestions": blocked.suggestions,
        },
    )


def screening_error_response(
    status_code: int = 500, reasoning: str = SCREENING_FAILED_REASONING
) -> JSONResponse:
    """Response used when screening could not be carried out."""
    suggestions = list(SCREENING_FAILED_SUGGESTIONS) if status_code >= 500 else []
    return JSONResponse(
        status_code=status_code,
        content={
            "isValid": False,
            "reasoning": reasoning,
            "blockedContent": [],
            "suggestions": suggestions,
        },
    )
