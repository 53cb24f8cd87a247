"""
hintlight/schemas/messages.py

Pydantic models for the message channel between the overlay and the relay.

Request:  {"action": "getHints", "problemInfo": {...}}
Response: {"success": true, "hints": "..."} | {"success": false, "error": "..."}
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from hintlight.schemas.problem import ProblemInfo


class GetHintsRequest(BaseModel):
    """Message body for POST /api/v1/messages."""

    model_config = ConfigDict(populate_by_name=True)

    action: Literal["getHints"] = "getHints"
    # Optional on purpose: a missing payload is answered with a failure
    # response, not a validation error.
    problem_info: ProblemInfo | None = Field(default=None, alias="problemInfo")


class HintResponse(BaseModel):
    """Tagged result returned by the relay."""

    success: bool
    hints: str | None = None
    error: str | None = None

    @classmethod
    def ok(cls, hints: str) -> "HintResponse":
        return cls(success=True, hints=hints)

    @classmethod
    def failure(cls, error: str) -> "HintResponse":
        return cls(success=False, error=error)
