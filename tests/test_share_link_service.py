"""Tests for the share link service."""

from datetime import timedelta
from itertools import repeat
from uuid import uuid4

import pytest

from photo_gallery.domain.errors import NotFoundError, UnavailableError
from photo_gallery.services.photos import PhotoLifecycleService
from photo_gallery.services.shares import ShareLinkService
from tests.conftest import FakeClock, InMemoryShareLinkRepository, make_image


def test_mint_then_resolve_returns_photo(
    photo_service: PhotoLifecycleService,
    share_link_service: ShareLinkService,
    clock: FakeClock,
) -> None:
    photo = photo_service.upload(make_image(), "Sunset")

    minted = share_link_service.mint(photo.id)
    resolved = share_link_service.resolve(minted.token)

    assert resolved.id == photo.id
    assert minted.expires_at == clock.now() + timedelta(hours=3)
    assert len(minted.token) >= 43


def test_mint_unknown_photo_is_not_found(share_link_service: ShareLinkService) -> None:
    with pytest.raises(NotFoundError):
        share_link_service.mint(uuid4())


def test_mint_recycled_photo_is_not_found(
    photo_service: PhotoLifecycleService,
    share_link_service: ShareLinkService,
    share_link_repository: InMemoryShareLinkRepository,
) -> None:
    photo = photo_service.upload(make_image(), "Sunset")
    photo_service.recycle(photo.id)

    with pytest.raises(NotFoundError):
        share_link_service.mint(photo.id)

    assert share_link_repository.links == {}


def test_resolve_unknown_token_is_not_found(
    share_link_service: ShareLinkService,
) -> None:
    with pytest.raises(NotFoundError):
        share_link_service.resolve("no-such-token")


def test_resolve_after_expiry_is_not_found(
    photo_service: PhotoLifecycleService,
    share_link_service: ShareLinkService,
    clock: FakeClock,
) -> None:
    photo = photo_service.upload(make_image(), "Sunset")
    minted = share_link_service.mint(photo.id)

    clock.advance(hours=3)
    assert share_link_service.resolve(minted.token).id == photo.id

    clock.advance(seconds=1)
    with pytest.raises(NotFoundError):
        share_link_service.resolve(minted.token)


def test_recycling_revokes_outstanding_links(
    photo_service: PhotoLifecycleService,
    share_link_service: ShareLinkService,
) -> None:
    photo = photo_service.upload(make_image(), "Sunset")
    minted = share_link_service.mint(photo.id)

    photo_service.recycle(photo.id)

    with pytest.raises(NotFoundError):
        share_link_service.resolve(minted.token)


def test_purged_photo_is_not_a_resolve_target(
    photo_service: PhotoLifecycleService,
    share_link_service: ShareLinkService,
) -> None:
    photo = photo_service.upload(make_image(), "Sunset")
    minted = share_link_service.mint(photo.id)
    photo_service.recycle(photo.id)
    photo_service.purge_forever(photo.id)

    with pytest.raises(NotFoundError):
        share_link_service.resolve(minted.token)


def test_resolve_failures_share_one_message(
    photo_service: PhotoLifecycleService,
    share_link_service: ShareLinkService,
    clock: FakeClock,
) -> None:
    revoked = photo_service.upload(make_image(), "Revoked")
    expired = photo_service.upload(make_image(), "Expired")
    revoked_token = share_link_service.mint(revoked.id).token
    photo_service.recycle(revoked.id)
    clock.advance(hours=2)
    expired_token = share_link_service.mint(expired.id).token
    clock.advance(hours=4)

    messages = set()
    for token in ("unknown", revoked_token, expired_token):
        with pytest.raises(NotFoundError) as excinfo:
            share_link_service.resolve(token)
        messages.add(excinfo.value.message)

    assert messages == {"Share link not found"}


def test_resolve_reflects_current_title(
    photo_service: PhotoLifecycleService,
    share_link_service: ShareLinkService,
) -> None:
    photo = photo_service.upload(make_image(), "Sunset")
    minted = share_link_service.mint(photo.id)

    photo_service.rename(photo.id, "Golden hour")

    assert share_link_service.resolve(minted.token).title == "Golden hour"


def test_remint_keeps_earlier_tokens_valid(
    photo_service: PhotoLifecycleService,
    share_link_service: ShareLinkService,
) -> None:
    photo = photo_service.upload(make_image(), "Sunset")

    first = share_link_service.mint(photo.id)
    second = share_link_service.mint(photo.id)

    assert first.token != second.token
    assert share_link_service.resolve(first.token).id == photo.id
    assert share_link_service.resolve(second.token).id == photo.id


def test_link_resolves_again_after_recover(
    photo_service: PhotoLifecycleService,
    share_link_service: ShareLinkService,
) -> None:
    photo = photo_service.upload(make_image(), "Sunset")
    minted = share_link_service.mint(photo.id)
    photo_service.recycle(photo.id)
    photo_service.recover(photo.id)

    assert share_link_service.resolve(minted.token).id == photo.id


def test_token_collision_regenerates(
    photo_service: PhotoLifecycleService,
    share_link_service: ShareLinkService,
    share_link_repository: InMemoryShareLinkRepository,
) -> None:
    photo = photo_service.upload(make_image(), "Sunset")
    tokens = iter(["taken", "taken", "fresh"])
    share_link_service.token_factory = lambda: next(tokens)

    first = share_link_service.mint(photo.id)
    second = share_link_service.mint(photo.id)

    assert first.token == "taken"
    assert second.token == "fresh"
    assert set(share_link_repository.links) == {"taken", "fresh"}


def test_persistent_collisions_raise_unavailable(
    photo_service: PhotoLifecycleService,
    share_link_service: ShareLinkService,
) -> None:
    photo = photo_service.upload(make_image(), "Sunset")
    tokens = repeat("taken")
    share_link_service.token_factory = lambda: next(tokens)
    share_link_service.mint(photo.id)

    with pytest.raises(UnavailableError):
        share_link_service.mint(photo.id)


def test_end_to_end_share_scenario(
    photo_service: PhotoLifecycleService,
    share_link_service: ShareLinkService,
) -> None:
    p1 = photo_service.upload(make_image(), "Sunset")
    assert photo_service.list_active(1, 20).items[0].id == p1.id

    t1 = share_link_service.mint(p1.id).token
    photo_service.recycle(p1.id)
    with pytest.raises(NotFoundError):
        share_link_service.resolve(t1)

    photo_service.recover(p1.id)
    assert p1.id in {photo.id for photo in photo_service.list_active(1, 20).items}

    t2 = share_link_service.mint(p1.id).token
    assert t2 != t1
    assert share_link_service.resolve(t2).id == p1.id
