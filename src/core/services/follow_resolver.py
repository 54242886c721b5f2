"""Follow-type resolution.

Turns the raw request parameters (`name`, `organisation`, `function_tag`,
`verify`) into a single :class:`FollowTarget`, querying the gazette index
when verification is requested or, for organisations, always (the display
name only exists in the index).
"""

from __future__ import annotations

import logging

from core.domain.errors import (
    AmbiguousResult,
    ConflictingParameters,
    InvalidNameFormat,
    MissingParameter,
    NotFound,
)
from core.domain.models import FollowQuery, FollowTarget, FollowType
from core.domain.names import name_tokens
from core.interfaces.gazette import GazetteIndex

logger = logging.getLogger(__name__)


def detect_follow_type(query: FollowQuery) -> FollowType:
    """Return the single follow type carried by `query`.

    Raises `ConflictingParameters` when several parameters are set and
    `MissingParameter` when none is.
    """

    provided = [
        follow_type
        for follow_type, value in (
            (FollowType.PERSON, query.name),
            (FollowType.ORGANISATION, query.organisation),
            (FollowType.ROLE_TAG, query.function_tag),
        )
        if value
    ]
    if len(provided) > 1:
        raise ConflictingParameters()
    if not provided:
        raise MissingParameter()

    follow_type = provided[0]
    if follow_type is FollowType.PERSON and len(name_tokens(query.name)) < 2:
        raise InvalidNameFormat()
    return follow_type


async def resolve_follow_target(query: FollowQuery, index: GazetteIndex) -> FollowTarget:
    follow_type = detect_follow_type(query)

    if follow_type is FollowType.PERSON:
        return await _resolve_person(query.name, verify=query.verify, index=index)
    if follow_type is FollowType.ORGANISATION:
        return await _resolve_organisation(query.organisation, index=index)
    return await _resolve_tag(query.function_tag, verify=query.verify, index=index)


async def _resolve_person(name: str, *, verify: bool, index: GazetteIndex) -> FollowTarget:
    if not verify:
        return FollowTarget(type=FollowType.PERSON, raw_argument=name, canonical_label=name)

    items = await index.search_by_person_name(name)
    if not items:
        raise NotFound()

    # First match wins; homonyms are not disambiguated.
    label = items[0].full_name
    logger.debug("Person %r resolved to %r (%d matches)", name, label, len(items))
    return FollowTarget(type=FollowType.PERSON, raw_argument=label, canonical_label=label)


async def _resolve_organisation(wikidata_id: str, *, index: GazetteIndex) -> FollowTarget:
    identities = await index.resolve_organisation_names(wikidata_id)
    if not identities:
        raise NotFound()
    if len(identities) > 1:
        raise AmbiguousResult()

    return FollowTarget(
        type=FollowType.ORGANISATION,
        raw_argument=wikidata_id,
        canonical_label=identities[0].name,
    )


async def _resolve_tag(tag: str, *, verify: bool, index: GazetteIndex) -> FollowTarget:
    if verify:
        items = await index.search_by_tag(tag)
        if not items:
            raise NotFound()
    return FollowTarget(type=FollowType.ROLE_TAG, raw_argument=tag, canonical_label=tag)
