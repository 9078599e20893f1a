"""
Validators for the type/status lookup features.

Messages name the lookup ("Sales order status ID is required.") and its label
("Status name is required."), so the functions are built per feature.
"""
from typing import Callable

from crm.schemas.lookups import CreateLookupCommand, UpdateLookupCommand
from .rules import collect, max_length, non_negative, optional_id, required_id, required_text

LABEL_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


def _label_caption(label_field: str) -> str:
    return {"type": "Type name", "status": "Status name"}.get(label_field, "Name")


def _shared(command, caption: str) -> list[str | None]:
    return [
        required_text(command.label, f"{caption} is required."),
        max_length(command.label, LABEL_MAX_LENGTH, f"{caption} cannot exceed {LABEL_MAX_LENGTH} characters."),
        max_length(
            command.description,
            DESCRIPTION_MAX_LENGTH,
            f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters.",
        ),
        non_negative(command.ordinal_position, "Ordinal position must be a non-negative number."),
    ]


def lookup_validators(
    display_name: str, label_field: str
) -> tuple[Callable[[CreateLookupCommand], list[str]], Callable[[UpdateLookupCommand], list[str]]]:
    """
    Build (create, update) validators for one lookup.

    Args:
        display_name: sentence-case entity name, e.g. "Invoice status"
        label_field: the model's label column (`type`, `status` or `name`)
    """
    caption = _label_caption(label_field)

    def validate_create(command: CreateLookupCommand) -> list[str]:
        return collect(
            optional_id(command.id, f"{display_name} ID is required."),
            *_shared(command, caption),
            required_id(command.created_by, "Created by is required."),
        )

    def validate_update(command: UpdateLookupCommand) -> list[str]:
        return collect(
            required_id(command.id, f"{display_name} ID is required."),
            *_shared(command, caption),
            required_id(command.modified_by, "Modified by is required."),
        )

    return validate_create, validate_update
