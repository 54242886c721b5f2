"""Analytics event names.

The set is closed: every distinct request outcome maps to exactly one of
these values, which are sent verbatim to Umami as the event name.
"""

from __future__ import annotations

from enum import Enum

from core.domain.models import FollowType


class AnalyticsEvent(str, Enum):
    """Event names understood by the analytics collaborator."""

    QRCODE_PEOPLE = "/qrcode-people"
    QRCODE_ORGANISATION = "/qrcode-organisation"
    QRCODE_TAG = "/qrcode-tag"
    GATEWAY_PEOPLE = "/gateway-people"
    GATEWAY_ORGANISATION = "/gateway-organisation"
    GATEWAY_TAG = "/gateway-tag"
    JORFSEARCH_REQUEST_PEOPLE = "/jorfsearch-request-people"
    JORFSEARCH_REQUEST_PEOPLE_FORMATTED = "/jorfsearch-request-people-formatted"
    JORFSEARCH_REQUEST_TAG = "/jorfsearch-request-tag"
    JORFSEARCH_REQUEST_ORGANISATION = "/jorfsearch-request-organisation"

    @classmethod
    def qrcode_for(cls, follow_type: FollowType) -> "AnalyticsEvent":
        """Event emitted after a successful QR render."""

        return _QRCODE_EVENTS[follow_type]

    @classmethod
    def gateway_for(cls, follow_type: FollowType) -> "AnalyticsEvent":
        """Event emitted after the gateway page is served."""

        return _GATEWAY_EVENTS[follow_type]


_QRCODE_EVENTS = {
    FollowType.PERSON: AnalyticsEvent.QRCODE_PEOPLE,
    FollowType.ORGANISATION: AnalyticsEvent.QRCODE_ORGANISATION,
    FollowType.ROLE_TAG: AnalyticsEvent.QRCODE_TAG,
}

_GATEWAY_EVENTS = {
    FollowType.PERSON: AnalyticsEvent.GATEWAY_PEOPLE,
    FollowType.ORGANISATION: AnalyticsEvent.GATEWAY_ORGANISATION,
    FollowType.ROLE_TAG: AnalyticsEvent.GATEWAY_TAG,
}
