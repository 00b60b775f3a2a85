import logging
from typing import Iterable, Sequence

from labdocs.config import settings
from labdocs.schemas.catalog import ProfileDefinition
from labdocs.schemas.documents import ProfileGroup
from labdocs.schemas.snapshot import TestSnapshot
from labdocs.services.values import money, price_of

logger = logging.getLogger(__name__)


def profile_key(snapshot: TestSnapshot) -> str | None:
    key = snapshot.profile_id
    if not key or key == settings.unknown_profile_key:
        return None
    return key


def match_profile(
    snapshots: Sequence[TestSnapshot],
    profiles: Iterable[ProfileDefinition],
    threshold: float | None = None,
) -> ProfileDefinition | None:
    """Return the first profile whose members cover enough of ``snapshots``."""
    if not snapshots:
        return None
    min_overlap = threshold if threshold is not None else settings.profile_match_threshold
    for profile in profiles:
        members = set(profile.test_ids)
        if not members:
            continue
        matches = sum(1 for snapshot in snapshots if snapshot.test_id in members)
        if matches > 0 and matches / len(snapshots) >= min_overlap:
            logger.debug("Matched %s/%s keyless tests to profile %s", matches, len(snapshots), profile.profile_id)
            return profile
    return None


def group_by_profile(
    snapshots: Iterable[TestSnapshot],
    profiles: Iterable[ProfileDefinition] | None = None,
    threshold: float | None = None,
) -> dict[str, list[TestSnapshot]]:
    """Partition a visit's snapshots by profile key, keeping first-seen order.

    Snapshots without a usable key are treated as one sibling set and given the
    key of the first catalog profile they overlap with by at least
    ``threshold``; otherwise they form the custom package group.
    """
    items = list(snapshots)
    keyless = [snapshot for snapshot in items if profile_key(snapshot) is None]

    fallback_key = settings.custom_package_key
    if keyless:
        matched = match_profile(keyless, profiles or [], threshold)
        if matched is not None:
            fallback_key = matched.profile_id
        else:
            logger.warning("%s tests matched no profile, grouping as %s", len(keyless), fallback_key)

    grouped: dict[str, list[TestSnapshot]] = {}
    for snapshot in items:
        grouped.setdefault(profile_key(snapshot) or fallback_key, []).append(snapshot)
    return grouped


def resolve_groups(
    grouped: dict[str, list[TestSnapshot]],
    profiles: Iterable[ProfileDefinition] | None = None,
) -> list[ProfileGroup]:
    catalog = {profile.profile_id: profile for profile in profiles or []}
    groups = []
    for key, members in grouped.items():
        if not members:
            logger.warning("Skipping empty profile group %s", key)
            continue

        keyed = any(profile_key(snapshot) == key for snapshot in members)
        profile = catalog.get(key)
        if profile is not None:
            groups.append(
                ProfileGroup(
                    key=key,
                    name=profile.name,
                    price=money(profile.price),
                    matched=True,
                    match_source="snapshot" if keyed else "overlap",
                    snapshots=members,
                )
            )
            continue

        # Unknown or custom group: priced per test.
        groups.append(
            ProfileGroup(
                key=key,
                name=members[0].profile_name or settings.custom_package_label,
                price=money(sum(price_of(snapshot.price) for snapshot in members)),
                matched=False,
                match_source="snapshot" if keyed else "custom",
                snapshots=members,
            )
        )
    return groups
