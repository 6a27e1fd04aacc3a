"""
Input validation schemas using Pydantic v2
Parses command lines and validates all command types
"""

import logging
import re
from typing import Optional, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .types import ALL, VERDICTS

logger = logging.getLogger(__name__)

COMMAND_TYPES = {
    "ADDTEAM",
    "START",
    "SUBMIT",
    "FLUSH",
    "FREEZE",
    "SCROLL",
    "QUERY_RANKING",
    "QUERY_SUBMISSION",
    "END",
}

_PROBLEM_RE = re.compile(r"^[A-Z]$")

# ==================== VALIDATOR FUNCTIONS ====================


class ValidatedCmd(BaseModel):
    """Command payload with per-type required fields"""

    type: str = Field(..., min_length=1, max_length=50, description="Command type")

    team: Optional[str] = Field(
        None, min_length=1, max_length=255, description="Team name"
    )

    # START fields
    duration: Optional[int] = Field(None, ge=0, description="Contest duration")
    problemCount: Optional[int] = Field(
        None, ge=1, le=26, description="Number of problems (1-26)"
    )

    # SUBMIT fields
    problem: Optional[str] = Field(None, description="Problem letter (A-Z)")
    status: Optional[str] = Field(None, description="Verdict")
    time: Optional[int] = Field(None, ge=1, description="Submission timestamp (>= 1)")

    # QUERY_SUBMISSION filters
    problemFilter: Optional[str] = Field(None, description="Problem letter or ALL")
    statusFilter: Optional[str] = Field(None, description="Verdict or ALL")

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        """Validate command type is one of allowed types"""
        if v not in COMMAND_TYPES:
            raise ValueError(f"type must be one of {COMMAND_TYPES}, got {v}")
        return v

    @field_validator("team")
    @classmethod
    def validate_team_name(cls, v: Optional[str]) -> Optional[str]:
        """Team names are single tokens"""
        if v is None:
            return v
        if any(ch.isspace() for ch in v):
            raise ValueError("team name cannot contain whitespace")
        return v

    @field_validator("problem")
    @classmethod
    def validate_problem(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not _PROBLEM_RE.match(v):
            raise ValueError(f"problem must be a letter A-Z, got {v}")
        return v

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if v not in VERDICTS:
            raise ValueError(f"status must be one of {VERDICTS}, got {v}")
        return v

    @field_validator("problemFilter")
    @classmethod
    def validate_problem_filter(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == ALL:
            return v
        if not _PROBLEM_RE.match(v):
            raise ValueError(f"problem filter must be a letter A-Z or ALL, got {v}")
        return v

    @field_validator("statusFilter")
    @classmethod
    def validate_status_filter(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == ALL:
            return v
        if v not in VERDICTS:
            raise ValueError(f"status filter must be a verdict or ALL, got {v}")
        return v

    @model_validator(mode="after")
    def validate_command_fields(self) -> Self:
        """Validate required fields based on command type"""
        cmd_type = self.type

        if cmd_type in {"ADDTEAM", "QUERY_RANKING"}:
            if self.team is None:
                raise ValueError(f"{cmd_type} requires team")

        elif cmd_type == "START":
            if self.duration is None:
                raise ValueError("START requires duration")
            if self.problemCount is None:
                raise ValueError("START requires problemCount")

        elif cmd_type == "SUBMIT":
            for name in ("team", "problem", "status", "time"):
                if getattr(self, name) is None:
                    raise ValueError(f"SUBMIT requires {name}")

        elif cmd_type == "QUERY_SUBMISSION":
            if self.team is None:
                raise ValueError("QUERY_SUBMISSION requires team")
            if self.problemFilter is None:
                self.problemFilter = ALL
            if self.statusFilter is None:
                self.statusFilter = ALL

        return self

    model_config = ConfigDict(extra="forbid")


def _keyword(tokens: list[str], pos: int, expected: str) -> None:
    if pos >= len(tokens) or tokens[pos] != expected:
        raise ValueError(f"expected {expected} at position {pos}")


def _prefixed(token: str, prefix: str) -> str:
    if not token.startswith(prefix):
        raise ValueError(f"expected {prefix}<value>, got {token}")
    return token[len(prefix):]


def _int_token(tokens: list[str], pos: int, name: str) -> int:
    if pos >= len(tokens):
        raise ValueError(f"missing {name}")
    try:
        return int(tokens[pos], 10)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {tokens[pos]}")


def _token(tokens: list[str], pos: int, name: str) -> str:
    if pos >= len(tokens):
        raise ValueError(f"missing {name}")
    return tokens[pos]


def parse_command_line(line: str) -> dict | None:
    """
    Parse one input line into a command payload dict

    Returns:
        dict: payload for apply_command(), or None for blank lines and unknown commands

    Raises:
        ValueError: If a known command is malformed

    Examples:
        - "ADDTEAM alpha" -> {"type": "ADDTEAM", "team": "alpha"}
        - "SUBMIT A BY alpha WITH Accepted AT 12" -> {"type": "SUBMIT", ...}
    """
    tokens = line.split()
    if not tokens:
        return None
    cmd_type = tokens[0]

    if cmd_type in {"ADDTEAM", "QUERY_RANKING"}:
        payload = {"type": cmd_type, "team": _token(tokens, 1, "team")}

    elif cmd_type == "START":
        _keyword(tokens, 1, "DURATION")
        duration = _int_token(tokens, 2, "duration")
        _keyword(tokens, 3, "PROBLEM")
        payload = {
            "type": cmd_type,
            "duration": duration,
            "problemCount": _int_token(tokens, 4, "problem count"),
        }

    elif cmd_type == "SUBMIT":
        problem = _token(tokens, 1, "problem")
        _keyword(tokens, 2, "BY")
        team = _token(tokens, 3, "team")
        _keyword(tokens, 4, "WITH")
        status = _token(tokens, 5, "status")
        _keyword(tokens, 6, "AT")
        payload = {
            "type": cmd_type,
            "problem": problem,
            "team": team,
            "status": status,
            "time": _int_token(tokens, 7, "time"),
        }

    elif cmd_type == "QUERY_SUBMISSION":
        team = _token(tokens, 1, "team")
        _keyword(tokens, 2, "WHERE")
        problem_filter = _prefixed(_token(tokens, 3, "problem filter"), "PROBLEM=")
        _keyword(tokens, 4, "AND")
        status_filter = _prefixed(_token(tokens, 5, "status filter"), "STATUS=")
        payload = {
            "type": cmd_type,
            "team": team,
            "problemFilter": problem_filter,
            "statusFilter": status_filter,
        }

    elif cmd_type in COMMAND_TYPES:
        payload = {"type": cmd_type}

    else:
        logger.debug(f"Ignoring unknown command: {cmd_type}")
        return None

    return validate_command(payload).model_dump(exclude_none=True)


def validate_command(cmd_dict: dict) -> ValidatedCmd:
    """
    Validate command dictionary

    Returns:
        ValidatedCmd: Validated command object

    Raises:
        ValueError: If validation fails
    """
    try:
        return ValidatedCmd(**cmd_dict)
    except Exception as e:
        logger.debug(f"Command validation failed: {e}")
        raise ValueError(f"Invalid command: {str(e)}")


# ==================== EXPORT ====================

__all__ = [
    "COMMAND_TYPES",
    "ValidatedCmd",
    "parse_command_line",
    "validate_command",
]
