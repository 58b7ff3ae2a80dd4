"""Artwork Routes — multipart upload, ordering, edits and removal."""

from uuid import uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from curator.core.errors import DatabaseError
from curator.models.artwork import Artwork
from curator.services import artwork_service
from tests.services.conftest import OWNER, STRANGER, auth_headers


def _upload(name="photo.PNG", title=None, locale=None):
    data = {}
    if title is not None:
        data["title"] = title
    if locale is not None:
        data["locale"] = locale
    return {"files": {"file": (name, b"\x89PNG...", "image/png")}, "data": data}


async def test_upload_assigns_increasing_order_and_default_titles(
    client, make_exhibition, storage,
):
    exhibition = await make_exhibition(OWNER)
    url = f"/api/v1/exhibitions/{exhibition.id}/artworks"

    first = await client.post(url, headers=auth_headers(OWNER), **_upload(locale="en"))
    second = await client.post(url, headers=auth_headers(OWNER), **_upload(title="Tide"))

    assert first.status_code == 201
    assert first.json()["order_index"] == 0
    assert first.json()["title"] == "Artwork 1"
    assert second.json()["order_index"] == 1
    assert second.json()["title"] == "Tide"
    assert storage.uploads[0].endswith(".png")
    assert first.json()["image_url"].startswith("https://storage.test/artworks/")


async def test_upload_default_title_is_korean(client, make_exhibition):
    exhibition = await make_exhibition(OWNER)
    res = await client.post(
        f"/api/v1/exhibitions/{exhibition.id}/artworks",
        headers=auth_headers(OWNER), **_upload(title="  "),
    )
    assert res.json()["title"] == "작품 1"


async def test_upload_to_foreign_exhibition_is_403(client, make_exhibition, storage):
    exhibition = await make_exhibition(OWNER)
    res = await client.post(
        f"/api/v1/exhibitions/{exhibition.id}/artworks",
        headers=auth_headers(STRANGER), **_upload(),
    )
    assert res.status_code == 403
    assert storage.uploads == []


async def _seed_artwork(test_db, exhibition_id, **fields):
    artwork = Artwork(
        exhibition_id=exhibition_id,
        title=fields.pop("title", "Tide"),
        description=fields.pop("description", "Waves"),
        image_url=fields.pop("image_url", "https://s/tide.png"),
        order_index=fields.pop("order_index", 0),
    )
    test_db.add(artwork)
    await test_db.commit()
    await test_db.refresh(artwork)
    return artwork


async def test_patch_keeps_description_when_not_sent(client, make_exhibition, test_db):
    exhibition = await make_exhibition(OWNER)
    artwork = await _seed_artwork(test_db, exhibition.id)
    res = await client.patch(
        f"/api/v1/exhibitions/{exhibition.id}/artworks/{artwork.id}",
        json={"title": "Low Tide"},
        headers=auth_headers(OWNER),
    )
    assert res.status_code == 200
    assert res.json()["title"] == "Low Tide"
    assert res.json()["description"] == "Waves"


async def test_patch_empty_description_clears_it(client, make_exhibition, test_db):
    exhibition = await make_exhibition(OWNER)
    artwork = await _seed_artwork(test_db, exhibition.id)
    res = await client.patch(
        f"/api/v1/exhibitions/{exhibition.id}/artworks/{artwork.id}",
        json={"title": "Tide", "description": ""},
        headers=auth_headers(OWNER),
    )
    assert res.json()["description"] is None


async def test_patch_artwork_of_other_exhibition_is_403(client, make_exhibition, test_db):
    mine = await make_exhibition(OWNER)
    other = await make_exhibition(OWNER)
    artwork = await _seed_artwork(test_db, other.id)
    res = await client.patch(
        f"/api/v1/exhibitions/{mine.id}/artworks/{artwork.id}",
        json={"title": "x"},
        headers=auth_headers(OWNER),
    )
    assert res.status_code == 403


async def test_unknown_artwork_is_403(client, make_exhibition):
    exhibition = await make_exhibition(OWNER)
    res = await client.delete(
        f"/api/v1/exhibitions/{exhibition.id}/artworks/{uuid4()}",
        headers=auth_headers(OWNER),
    )
    assert res.status_code == 403


async def test_delete_removes_row_and_image(client, make_exhibition, test_db, storage):
    exhibition = await make_exhibition(OWNER)
    artwork = await _seed_artwork(test_db, exhibition.id)
    res = await client.delete(
        f"/api/v1/exhibitions/{exhibition.id}/artworks/{artwork.id}",
        headers=auth_headers(OWNER),
    )
    assert res.status_code == 200
    assert storage.deleted == ["https://s/tide.png"]
    result = await test_db.execute(select(Artwork).where(Artwork.id == artwork.id))
    assert result.scalar_one_or_none() is None


async def test_delete_by_stranger_is_403(client, make_exhibition, test_db, storage):
    exhibition = await make_exhibition(OWNER)
    artwork = await _seed_artwork(test_db, exhibition.id)
    res = await client.delete(
        f"/api/v1/exhibitions/{exhibition.id}/artworks/{artwork.id}",
        headers=auth_headers(STRANGER),
    )
    assert res.status_code == 403
    assert storage.deleted == []


async def test_delete_keeps_image_shared_with_duplicate(
    client, make_exhibition, test_db, storage,
):
    source = await make_exhibition(OWNER)
    copy = await make_exhibition(OWNER, title="Blue Hour (Copy)")
    await _seed_artwork(test_db, source.id)
    shared = await _seed_artwork(test_db, copy.id)

    res = await client.delete(
        f"/api/v1/exhibitions/{copy.id}/artworks/{shared.id}",
        headers=auth_headers(OWNER),
    )
    assert res.status_code == 200
    assert storage.deleted == []
    remaining = await test_db.execute(
        select(Artwork.image_url).where(Artwork.exhibition_id == source.id),
    )
    assert remaining.scalars().all() == ["https://s/tide.png"]


async def test_failed_insert_removes_uploaded_object(
    make_exhibition, test_db, storage, monkeypatch,
):
    exhibition = await make_exhibition(OWNER)

    async def failing_commit():
        raise OperationalError("INSERT", {}, Exception("disk full"))

    monkeypatch.setattr(test_db, "commit", failing_commit)
    with pytest.raises(DatabaseError):
        await artwork_service.add_artwork(
            test_db, storage, exhibition,
            filename="tide.png", data=b"\x89PNG", content_type="image/png",
            title=None,
        )
    monkeypatch.undo()

    assert len(storage.uploads) == 1
    assert storage.deleted == [f"https://storage.test/artworks/{storage.uploads[0]}"]
    rows = await test_db.execute(select(Artwork))
    assert rows.scalars().all() == []
