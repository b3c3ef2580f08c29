"""
namuh_access.auth.models

Auth domain models.

Responsibilities:
- Define the user role families (`Role`).
- Define the requesting identity (`Principal`) and what a guard observes (`SessionState`).
- `SignedInUser`: a principal known to be signed in, for endpoints that require one.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Role(enum.StrEnum):
    applicant = "applicant"
    recruiter = "recruiter"


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Identity of the current user. Anonymous principals carry no id and no role.
    """

    id: str | None
    role: Role | None
    is_authenticated: bool

    @classmethod
    def anonymous(cls) -> Principal:
        return cls(id=None, role=None, is_authenticated=False)

    @classmethod
    def signed_in(cls, *, user_id: str, role: Role) -> Principal:
        return cls(id=user_id, role=role, is_authenticated=True)


@dataclass(frozen=True, slots=True)
class SignedInUser:
    user_id: str
    role: Role


@dataclass(frozen=True, slots=True)
class SessionState:
    principal: Principal
    is_loading: bool = False

    @classmethod
    def loading(cls) -> SessionState:
        return cls(principal=Principal.anonymous(), is_loading=True)

    @classmethod
    def anonymous(cls) -> SessionState:
        return cls(principal=Principal.anonymous())


# --- Module Notes -----------------------------------------------------------
# Both types are immutable snapshots: a new state is produced on every session change.
