"""Gateway landing page (`/choose`) content.

A scanned QR code opens this page. It shows the follow target and offers
deep links that pre-fill the follow command in the WhatsApp or Telegram
conversation with the JOEL bot, plus the bare QR for desktop visitors.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping

from core.config import AppSettings
from core.domain.errors import InvalidNameFormat
from core.domain.models import FollowQuery, FollowTarget, FollowType
from core.domain.names import name_tokens
from core.domain.urls import encode_uri
from core.interfaces.gazette import GazetteIndex
from core.services.follow_resolver import resolve_follow_target

# Parameters replayed into the embedded QR image URL, in this order.
REPLAYED_PARAMETERS = ("name", "organisation", "function_tag", "people", "verify")

_MOBILE_USER_AGENT = re.compile(
    r"Android|webOS|iPhone|iPad|iPod|BlackBerry|IEMobile|Opera Mini",
    re.IGNORECASE,
)

_START_COMMANDS = {
    FollowType.PERSON: "Suivre",
    FollowType.ORGANISATION: "SuivreO",
    FollowType.ROLE_TAG: "SuivreF",
}


@dataclass(frozen=True)
class GatewayPage:
    target: FollowTarget
    qr_url: str
    hide_qr: bool
    base_url: str
    whatsapp_link: str
    telegram_link: str


def is_mobile_user_agent(user_agent: str | None) -> bool:
    return bool(_MOBILE_USER_AGENT.search(user_agent or ""))


def start_command(target: FollowTarget) -> str:
    return f"{_START_COMMANDS[target.type]} {target.raw_argument}"


def build_qr_image_url(params: Mapping[str, str], app_url: str) -> str:
    """URL of the bare QR image for the same target (`frame=false`)."""

    pairs = [f"{name}={params[name]}" for name in REPLAYED_PARAMETERS if params.get(name)]
    pairs.append("frame=false")
    return f"{app_url}/qrcode?{encode_uri('&'.join(pairs))}"


def build_messaging_links(command: str, settings: AppSettings) -> tuple[str, str]:
    """Return the (WhatsApp, Telegram) deep links for `command`."""

    whatsapp = encode_uri(f"https://wa.me/{settings.whatsapp_phone_number}?text=Bonjour JOEL! {command}")
    # The Telegram flow reads better with a search first.
    telegram = encode_uri(
        f"https://t.me/{settings.telegram_bot_name}?text={command.replace('Suivre', 'Rechercher', 1)}"
    )
    return whatsapp, telegram


async def build_gateway(
    params: Mapping[str, str],
    *,
    index: GazetteIndex,
    settings: AppSettings,
    user_agent: str | None = None,
) -> GatewayPage:
    """Resolve the target named in `params` and assemble the page content.

    People and tags are displayed as given; organisations are always looked
    up because only the index knows their display name. A `name` parameter
    that is present counts as a person target even when empty.
    """

    if "name" in params and len(name_tokens(params["name"])) < 2:
        raise InvalidNameFormat()

    query = FollowQuery(
        name=params.get("name", ""),
        organisation=params.get("organisation", ""),
        function_tag=params.get("function_tag", ""),
        verify=False,
    )
    target = await resolve_follow_target(query, index)

    whatsapp, telegram = build_messaging_links(start_command(target), settings)
    return GatewayPage(
        target=target,
        qr_url=build_qr_image_url(params, settings.app_url),
        hide_qr=is_mobile_user_agent(user_agent),
        base_url=settings.app_url,
        whatsapp_link=whatsapp,
        telegram_link=telegram,
    )
