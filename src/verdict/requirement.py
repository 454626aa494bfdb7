"""The requirement record returned by unsatisfied constraints."""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class Requirement(BaseModel):
    """A textual requirement that a checked object does not meet.

    Requirements are plain data: constraints return them, callers render
    them. The engine never copies or merges requirements, so the instance a
    rule hands out is the instance the caller receives. Equality and hashing
    are by identity.

    Attributes
    ----------
    text
        Description of what must be met. Stored exactly as given.
    member_names
        Names of the members the requirement applies to. Empty when the
        requirement concerns the whole object.

    Examples
    --------
    >>> Requirement("Must not be null").member_names
    ()
    >>> Requirement("Required", ["name", "email"]).member_names
    ('name', 'email')
    """

    model_config = ConfigDict(frozen=True)

    text: str
    member_names: tuple[str, ...] = ()

    def __init__(self, text: str, member_names: Iterable[str] | str | None = None) -> None:
        super().__init__(text=text, member_names=member_names)

    # Identity semantics: two requirements with the same text are still two requirements.
    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return object.__hash__(self)

    @field_validator("text")
    @classmethod
    def _text_not_white_space(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Text must not be white space")
        return v

    @field_validator("member_names", mode="before")
    @classmethod
    def _collect_member_names(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, str):
            return (v,)
        if isinstance(v, Iterable):
            return tuple(v)
        return v

    @field_validator("member_names")
    @classmethod
    def _member_names_not_white_space(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if any(not name.strip() for name in v):
            raise ValueError("All member names must not be null or white space")
        return v
