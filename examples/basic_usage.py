"""Basic usage example for Verdict."""

import asyncio
from dataclasses import dataclass

from verdict import (
    CancellationToken,
    ConstraintRegistry,
    Requirement,
    any_of,
    constraint,
    get_for,
    registry_scope,
    starting_with,
)


@dataclass
class Signup:
    name: str = ""
    email: str = ""
    phone: str = ""


TAKEN_EMAILS = {"ada@example.com"}


@constraint
def has_name(signup: Signup) -> list[Requirement]:
    if not signup.name.strip():
        return [Requirement("Name is required", ["name"])]
    return []


@constraint
async def email_is_free(signup: Signup, cancellation: CancellationToken) -> list[Requirement]:
    # Stands in for a remote lookup
    await asyncio.sleep(0.01)
    cancellation.raise_if_cancelled()
    if signup.email in TAKEN_EMAILS:
        return [Requirement("Email is already in use", ["email"])]
    return []


def build_signup_constraint():
    contact = (
        any_of(lambda signup: bool(signup.email))
        .or_(lambda signup: bool(signup.phone))
        .fulfils(Requirement("An email or a phone number is required", ["email", "phone"]))
        .as_one_constraint()
    )

    return (
        starting_with(has_name)
        .followed_by(contact)
        .checked_and_ended_with(email_is_free)
    )


async def main():
    """Check a few signups and print what they are missing."""
    registry = ConstraintRegistry()
    registry.register_for(Signup, build_signup_constraint())

    signups = [
        Signup(),
        Signup(name="Ada", email="ada@example.com"),
        Signup(name="Grace", phone="555-0100"),
    ]

    with registry_scope(registry):
        for signup in signups:
            requirements = await get_for(Signup).check(signup)
            if not requirements:
                print(f"{signup}: valid")
                continue
            print(f"{signup}:")
            for requirement in requirements:
                members = ", ".join(requirement.member_names) or "<object>"
                print(f"  - {requirement.text} ({members})")


if __name__ == "__main__":
    asyncio.run(main())
