"""API models for request/response schemas."""

from typing import Optional

from pydantic import BaseModel, Field


class ApiResponse(BaseModel):
    """Envelope returned by every JSON endpoint."""
    ok: bool = Field(..., description="Whether the request was successful")
    error: Optional[str] = Field(None, description="Error message when ok is false")


class ApplicationSubmission(BaseModel):
    """Documented shape of a POST /apply body.

    The endpoint reads the raw JSON object so that every field problem is
    reported by the intake validator with the same error envelope.
    """
    discord_id: str = Field(..., description="Applicant Discord user id (17-20 digits)")
    rg: str = Field(..., description="In-game registration number")
    nome: str = Field(..., description="In-game name")
    tempo: str = Field(..., description="Time spent in Nova Capital")
    amor: str = Field(..., description="Answer about valuing one's life")
    safes: str = Field(..., description="Three safe areas")
    joalheria: str = Field(..., description="Min/max crew for the jewelry heist")
    skill: str = Field(..., description="P1 or Trocação")
    pretende: str = Field(..., description="What the applicant plans to do")
