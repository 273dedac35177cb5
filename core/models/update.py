# ============================================================================
# PARTIAL UPDATE MODEL
# ============================================================================
# STATUS: Domain model - PATCH /returns request body
# PURPOSE: Tri-state (absent / null / value) validation of mutable fields
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================
"""
Partial Update Model

A PATCH body names one row by ticket_link and carries any subset of the
three mutable fields. Each field has three states:

    UNSET  -> key absent from the body; column left untouched
    None   -> key present with null; column cleared
    "..."  -> key present with a value; column set

Plain Optional cannot tell UNSET from None, hence the sentinel.

Field rules:
    status               null or "" counts as absent; otherwise trimmed and
                         checked against ReturnStatus
    om_update            taken as-is (null clears, other values stringified)
    designated_om_agent  trimmed; "" becomes null
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from core.contracts import MUTABLE_COLUMNS, ReturnStatus
from core.errors import InvalidRequestError
from core.models.return_record import stringify


class _Unset:
    """Marker for a field absent from the request body."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()

FieldValue = Union[str, None, _Unset]

ALLOWED_STATUS_MESSAGE = "status must be one of: " + ", ".join(ReturnStatus.values())


@dataclass(frozen=True)
class ReturnUpdate:
    """Validated partial update for one row."""

    ticket_link: str
    status: FieldValue = UNSET
    om_update: FieldValue = UNSET
    designated_om_agent: FieldValue = UNSET

    @classmethod
    def from_payload(cls, payload: Any) -> "ReturnUpdate":
        """
        Validate a decoded JSON body.

        Unknown keys are ignored. Validation runs in a fixed order so the
        first problem reported is stable: body shape, ticket_link, status,
        then the at-least-one-field rule.

        Raises:
            InvalidRequestError: on any rule violation
        """
        if not isinstance(payload, Mapping):
            raise InvalidRequestError("Invalid JSON body")

        ticket_link = payload.get("ticket_link")
        if not isinstance(ticket_link, str) or not ticket_link.strip():
            raise InvalidRequestError("ticket_link is required", field="ticket_link")

        update = cls(
            ticket_link=ticket_link,
            status=cls._parse_status(payload),
            om_update=cls._parse_om_update(payload),
            designated_om_agent=cls._parse_agent(payload),
        )

        if not update.changes():
            raise InvalidRequestError(
                "At least one of status, om_update, or designated_om_agent is required"
            )
        return update

    @staticmethod
    def _parse_status(payload: Mapping) -> FieldValue:
        raw = payload.get("status", UNSET)
        if raw is UNSET or raw is None or raw == "":
            return UNSET
        status = ReturnStatus.parse(stringify(raw).strip())
        if status is None:
            raise InvalidRequestError(ALLOWED_STATUS_MESSAGE, field="status", value=raw)
        return status.value

    @staticmethod
    def _parse_om_update(payload: Mapping) -> FieldValue:
        if "om_update" not in payload:
            return UNSET
        return stringify(payload["om_update"])

    @staticmethod
    def _parse_agent(payload: Mapping) -> FieldValue:
        if "designated_om_agent" not in payload:
            return UNSET
        raw = payload["designated_om_agent"]
        if raw is None:
            return None
        return stringify(raw).strip() or None

    def changes(self) -> Dict[str, Optional[str]]:
        """Present fields only, in column order, ready for the SET clause."""
        return {
            column: getattr(self, column)
            for column in MUTABLE_COLUMNS
            if getattr(self, column) is not UNSET
        }


__all__ = ["ReturnUpdate", "UNSET", "ALLOWED_STATUS_MESSAGE"]
