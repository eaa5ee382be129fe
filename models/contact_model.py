"""
Contact page record: a single object with the site's contact details and the
list of event coordinators shown on the public contact page.
"""

from typing import Any, Dict

from common.errors import ValidationError
from models.schema import FieldSpec, RecordSchema

COORDINATOR = RecordSchema(
    "Coordinator",
    (
        FieldSpec("name"),
        FieldSpec("role"),
        FieldSpec("phone"),
        FieldSpec("image"),
        FieldSpec("imageType", "url"),
    ),
)

SOCIAL_MEDIA = RecordSchema(
    "SocialMedia",
    (FieldSpec("instagram"), FieldSpec("youtube")),
)

CONTACT = RecordSchema(
    "Contact",
    (
        FieldSpec("email"),
        FieldSpec("phone"),
        FieldSpec("address"),
        FieldSpec("socialMedia", nested=SOCIAL_MEDIA),
        FieldSpec("coordinators", nested=COORDINATOR, many=True),
    ),
)


def new_coordinator(name: str, role: str) -> Dict[str, Any]:
    return COORDINATOR.normalize({"name": name, "role": role})


def validate_contact(contact: Dict[str, Any]) -> None:
    if not contact.get("email") or not contact.get("phone"):
        raise ValidationError("Email and Phone are required.")
    for coord in contact.get("coordinators") or []:
        if not coord.get("name") or not coord.get("role"):
            raise ValidationError("All coordinators must have a Name and Role.")
