"""
Pydantic model for the user record the RBAC functions operate on
"""
from collections.abc import Mapping
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from app.rbac.roles import Role

# Field names a stored user document may use for per-user permission overrides
OVERRIDE_FIELDS = ('permission_overrides', 'permissionOverrides', 'permissions')

_RECORD_FIELDS = ('id', 'email', 'role', 'role_claim', 'suspended')


class UserRecord(BaseModel):
    """
    Snapshot of a user as supplied by the session or persistence layer.

    Only ``role`` and ``permission_overrides`` are inspected for
    authorization. Identity fields and any extra document fields are
    carried through untouched.
    """
    model_config = ConfigDict(frozen=True, extra='allow', populate_by_name=True)

    id: Optional[Any] = Field(None, description="Opaque user identifier")
    email: Optional[str] = Field(None, description="Opaque email address")
    role: Optional[Role] = Field(None, description="Primary role, None when missing or unrecognised")
    role_claim: Optional[str] = Field(
        None,
        exclude=True,
        description="Role string as stored when it is not a recognised role",
    )
    permission_overrides: Optional[Dict[str, Any]] = Field(
        None,
        validation_alias=AliasChoices(*OVERRIDE_FIELDS),
        description="Replaces the role's default permissions when present",
    )
    suspended: bool = Field(False, description="Suspended users are treated as signed out")

    @classmethod
    def from_document(cls, doc: Mapping, user_id: Any = None) -> 'UserRecord':
        """
        Build a record from an untyped stored document.

        Never raises for bad role or permission data. An unrecognised role
        becomes None, and an override value that is present but is not a
        mapping becomes an empty mapping, so both resolve to deny. The
        unrecognised role string is kept in ``role_claim``.
        """
        if not isinstance(doc, Mapping):
            doc = {}

        overrides = None
        for field in OVERRIDE_FIELDS:
            if doc.get(field) is not None:
                raw = doc[field]
                if isinstance(raw, Mapping):
                    # values are kept as-is, only a literal True grants
                    overrides = {str(key): value for key, value in raw.items()}
                else:
                    overrides = {}
                break

        raw_role = doc.get('role')
        role = Role.from_string(raw_role)
        email = doc.get('email')
        extra = {
            key: value for key, value in doc.items()
            if isinstance(key, str)
            and key not in OVERRIDE_FIELDS
            and key not in _RECORD_FIELDS
        }
        return cls(
            id=user_id if user_id is not None else doc.get('id'),
            email=email if isinstance(email, str) else None,
            role=role,
            role_claim=raw_role if role is None and isinstance(raw_role, str) and raw_role else None,
            permission_overrides=overrides,
            suspended=doc.get('suspended') is True,
            **extra,
        )

    def to_document(self) -> dict:
        """Serialise back to the stored document shape"""
        doc = self.model_dump(exclude={'id', 'permission_overrides'})
        doc['role'] = self.role.value if self.role else self.role_claim
        if self.permission_overrides is not None:
            doc['permissions'] = dict(self.permission_overrides)
        return doc


def as_user_record(user) -> Optional[UserRecord]:
    """
    Normalise whatever the caller passed into a UserRecord.

    Accepts a UserRecord, a mapping (raw document) or None. Any other
    object is read through its record and override attributes.
    """
    if user is None:
        return None
    if isinstance(user, UserRecord):
        return user
    if isinstance(user, Mapping):
        return UserRecord.from_document(user)

    doc = {
        field: getattr(user, field)
        for field in ('id', 'email', 'role', 'suspended')
        if getattr(user, field, None) is not None
    }
    for field in OVERRIDE_FIELDS:
        value = getattr(user, field, None)
        if value is not None:
            doc[field] = value
            break
    return UserRecord.from_document(doc)
