"""QR payload: the gateway URL a scanned code opens, plus the render request."""

from __future__ import annotations

from core.domain.errors import ConflictingParameters
from core.domain.models import DEFAULT_QRCODE_SIZE, FollowTarget, FollowType, QRRenderRequest
from core.domain.urls import encode_uri

_QUERY_PARAMETER = {
    FollowType.PERSON: "name",
    FollowType.ORGANISATION: "organisation",
    FollowType.ROLE_TAG: "function_tag",
}


def build_destination_url(target: FollowTarget, app_url: str) -> str:
    """`{app_url}/choose?<param>=<raw argument>`, URI-encoded as a whole."""

    parameter = _QUERY_PARAMETER[target.type]
    return encode_uri(f"{app_url.rstrip('/')}/choose?{parameter}={target.raw_argument}")


def check_output_options(size: int | None, frame: bool) -> None:
    """A fixed `size` only makes sense for a bare QR: framed output uses the
    default size so that it fits the frame layout.
    """

    if size is not None and frame:
        raise ConflictingParameters("Cannot use fixed size and frame at the same time.")


def build_render_request(
    target: FollowTarget,
    app_url: str,
    *,
    size: int | None = None,
    frame: bool = True,
) -> QRRenderRequest:
    """Combine the destination URL with the output options."""

    check_output_options(size, frame)

    return QRRenderRequest(
        destination_url=build_destination_url(target, app_url),
        pixel_size=size if size is not None else DEFAULT_QRCODE_SIZE,
        frame_enabled=frame,
        label=target.canonical_label or None,
        explicit_size=size is not None,
    )
