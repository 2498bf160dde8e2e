import uuid

import pytest

from tests._helpers import HEADERS, auth_headers


SHORT_BODY = {"type": "short", "payload": {"message": "a new post"}}


# --------------------------------- create ---------------------------------

def test_create_feed_content_returns_201_with_payload(client, world, content_service):
    resp = client.post("/contents/feed", json=SHORT_BODY, headers=auth_headers("alice-token"))

    assert resp.status_code == 201
    payload = resp.json()["payload"]
    created = content_service.created[0]
    assert payload == created.to_content_payload(world.alice).model_dump(mode="json", by_alias=True)
    assert payload["type"] == "short"
    assert payload["payload"] == {"message": "a new post"}
    assert payload["author"]["id"] == str(world.alice.uuid)
    assert payload["author"]["castcleId"] == "alice"
    assert payload["liked"] == {"count": 0, "liked": False}


@pytest.mark.parametrize("token", ["guest-token", "pending-token"])
def test_create_feed_content_forbidden_for_guest_or_unactivated(client, content_service, user_service, token):
    resp = client.post("/contents/feed", json=SHORT_BODY, headers=auth_headers(token))

    assert resp.status_code == 403
    assert resp.json()["code"] == "1007"
    assert content_service.created == []
    assert user_service.credential_lookups == 0


def test_create_blog_requires_header(client, content_service):
    body = {"type": "blog", "payload": {"message": "body only"}}
    resp = client.post("/contents/feed", json=body, headers=auth_headers("alice-token"))

    assert resp.status_code == 422
    assert content_service.created == []


# --------------------------------- read ---------------------------------

def test_get_content_from_id(client, world):
    resp = client.get(f"/contents/{world.alice_post.uuid}", headers=auth_headers("bob-token"))

    assert resp.status_code == 200
    assert resp.json()["payload"]["id"] == str(world.alice_post.uuid)
    assert resp.json()["payload"]["payload"] == {"message": "hello world"}


@pytest.mark.parametrize("content_id", ["abc123", str(uuid.uuid4())])
def test_get_missing_content_returns_not_found(client, content_id):
    resp = client.get(f"/contents/{content_id}", headers=auth_headers("alice-token"))

    assert resp.status_code == 404
    assert resp.json() == {
        "statusCode": 404,
        "code": "1002",
        "message": "The requested URL was not found.",
    }


def test_not_found_message_is_localized(client):
    resp = client.get("/contents/abc123", headers=auth_headers("alice-token", **{"Accept-Language": "th-TH,th;q=0.9"}))

    assert resp.status_code == 404
    assert resp.json()["message"] == "ไม่พบ URL ที่ร้องขอ"


# --------------------------------- update ---------------------------------

def test_update_content_by_author(client, world, content_service):
    body = {"type": "blog", "payload": {"header": "Title", "message": "Long text"}}
    resp = client.put(f"/contents/{world.alice_post.uuid}", json=body, headers=auth_headers("alice-token"))

    assert resp.status_code == 200
    payload = resp.json()["payload"]
    assert payload["type"] == "blog"
    assert payload["payload"] == {"header": "Title", "message": "Long text"}
    assert content_service.updated == [world.alice_post]


def test_update_missing_content_returns_not_found(client, content_service):
    resp = client.put(f"/contents/{uuid.uuid4()}", json=SHORT_BODY, headers=auth_headers("alice-token"))

    assert resp.status_code == 404
    assert content_service.updated == []


def test_update_without_edit_permission_is_forbidden(client, world, content_service):
    resp = client.put(f"/contents/{world.alice_post.uuid}", json=SHORT_BODY, headers=auth_headers("bob-token"))

    assert resp.status_code == 403
    assert content_service.updated == []
    assert world.alice_post.payload == {"message": "hello world"}


@pytest.mark.parametrize("token", ["guest-token", "pending-token"])
def test_update_forbidden_for_guest_or_unactivated(client, world, content_service, token):
    resp = client.put(f"/contents/{world.alice_post.uuid}", json=SHORT_BODY, headers=auth_headers(token))

    assert resp.status_code == 403
    assert content_service.updated == []


# --------------------------------- delete ---------------------------------

def test_delete_content_by_author(client, world, content_service):
    resp = client.delete(f"/contents/{world.alice_post.uuid}", headers=auth_headers("alice-token"))

    assert resp.status_code == 204
    assert resp.content == b""
    assert content_service.deleted == [world.alice_post]
    assert world.alice_post.is_deleted

    again = client.get(f"/contents/{world.alice_post.uuid}", headers=auth_headers("alice-token"))
    assert again.status_code == 404


def test_delete_missing_content_returns_not_found(client, content_service):
    resp = client.delete("/contents/abc123", headers=auth_headers("alice-token"))

    assert resp.status_code == 404
    assert content_service.deleted == []


@pytest.mark.parametrize("token", ["guest-token", "pending-token", "bob-token"])
def test_delete_forbidden_without_permission(client, world, content_service, token):
    resp = client.delete(f"/contents/{world.alice_post.uuid}", headers=auth_headers(token))

    assert resp.status_code == 403
    assert content_service.deleted == []
    assert not world.alice_post.is_deleted


# --------------------------------- list ---------------------------------

def test_list_contents_of_requesting_user(client, world):
    world.add_content(world.alice, {"header": "h", "message": "m"}, type="blog")
    world.add_content(world.bob, {"message": "not mine"})

    resp = client.get("/contents", headers=auth_headers("alice-token"))

    assert resp.status_code == 200
    body = resp.json()
    assert len(body["payload"]) == 2
    assert {p["author"]["id"] for p in body["payload"]} == {str(world.alice.uuid)}
    assert body["pagination"] == {"previous": None, "self": 1, "next": None, "limit": 25}


def test_list_contents_applies_query_options(client, world, content_service):
    for i in range(3):
        world.add_content(world.alice, {"header": f"h{i}", "message": "m"}, type="blog")

    resp = client.get(
        "/contents",
        params={"sortBy": "asc(createdAt)", "page": "2", "limit": "2", "type": "blog"},
        headers=auth_headers("alice-token"),
    )

    assert resp.status_code == 200
    options = content_service.list_options[0]
    assert options.sort_by.field == "createdAt"
    assert options.sort_by.type.value == "asc"
    assert options.page == 2
    assert options.limit == 2
    assert options.type.value == "blog"

    body = resp.json()
    assert len(body["payload"]) == 1
    assert body["pagination"] == {"previous": 1, "self": 2, "next": None, "limit": 2}


def test_list_contents_invalid_query_falls_back_to_defaults(client, content_service):
    resp = client.get(
        "/contents",
        params={"sortBy": "sideways(title)", "page": "-4", "limit": "lots", "type": "poem"},
        headers=auth_headers("alice-token"),
    )

    assert resp.status_code == 200
    options = content_service.list_options[0]
    assert options.sort_by.field == "updatedAt"
    assert options.sort_by.type.value == "desc"
    assert options.page == 1
    assert options.limit == 25
    assert options.type is None


# --------------------------------- like / unlike ---------------------------------

@pytest.mark.parametrize("action", ["liked", "unliked"])
def test_like_with_own_user_calls_collaborator_once(client, world, content_service, action):
    resp = client.put(
        f"/contents/{world.alice_post.uuid}/{action}",
        json={"authorId": str(world.bob.uuid)},
        headers=auth_headers("bob-token"),
    )

    assert resp.status_code == 204
    assert resp.content == b""
    calls = content_service.liked if action == "liked" else content_service.unliked
    assert calls == [(world.alice_post, world.bob)]


@pytest.mark.parametrize("action", ["liked", "unliked"])
def test_like_as_someone_else_is_forbidden(client, world, content_service, action):
    resp = client.put(
        f"/contents/{world.alice_post.uuid}/{action}",
        json={"authorId": str(world.alice.uuid)},
        headers=auth_headers("bob-token"),
    )

    assert resp.status_code == 403
    assert content_service.liked == []
    assert content_service.unliked == []


@pytest.mark.parametrize("action", ["liked", "unliked"])
def test_like_by_unactivated_account_is_forbidden(client, world, content_service, action):
    resp = client.put(
        f"/contents/{world.alice_post.uuid}/{action}",
        json={"authorId": str(world.pending.uuid)},
        headers=auth_headers("pending-token"),
    )

    assert resp.status_code == 403
    assert resp.json()["code"] == "1007"
    assert content_service.liked == []
    assert content_service.unliked == []


def test_like_with_unknown_author_is_forbidden(client, world, content_service):
    resp = client.put(
        f"/contents/{world.alice_post.uuid}/liked",
        json={"authorId": "u1"},
        headers=auth_headers("bob-token"),
    )

    assert resp.status_code == 403
    assert content_service.liked == []


@pytest.mark.parametrize("action", ["liked", "unliked"])
def test_like_missing_content_returns_not_found(client, world, content_service, action):
    resp = client.put(
        f"/contents/abc123/{action}",
        json={"authorId": str(world.bob.uuid)},
        headers=auth_headers("bob-token"),
    )

    assert resp.status_code == 404
    assert content_service.liked == []
    assert content_service.unliked == []


def test_liked_count_reflected_in_payload(client, world):
    client.put(
        f"/contents/{world.alice_post.uuid}/liked",
        json={"authorId": str(world.bob.uuid)},
        headers=auth_headers("bob-token"),
    )

    resp = client.get(f"/contents/{world.alice_post.uuid}", headers=auth_headers("alice-token"))
    assert resp.json()["payload"]["liked"]["count"] == 1


def test_liked_flag_follows_the_requesting_user(client, world):
    client.put(
        f"/contents/{world.alice_post.uuid}/liked",
        json={"authorId": str(world.bob.uuid)},
        headers=auth_headers("bob-token"),
    )

    as_bob = client.get(f"/contents/{world.alice_post.uuid}", headers=auth_headers("bob-token"))
    as_alice = client.get(f"/contents/{world.alice_post.uuid}", headers=auth_headers("alice-token"))

    assert as_bob.json()["payload"]["liked"] == {"count": 1, "liked": True}
    assert as_alice.json()["payload"]["liked"] == {"count": 1, "liked": False}


def test_update_response_reports_liked_flag_for_author(client, world):
    world.alice_post.liked_by.add(world.alice.uuid)

    resp = client.put(f"/contents/{world.alice_post.uuid}", json=SHORT_BODY, headers=auth_headers("alice-token"))

    assert resp.status_code == 200
    assert resp.json()["payload"]["liked"] == {"count": 1, "liked": True}


# --------------------------------- headers and credential ---------------------------------

@pytest.mark.parametrize("missing", ["Accept-Language", "Accept-Version"])
def test_required_headers(client, world, missing):
    headers = auth_headers("alice-token")
    del headers[missing]

    resp = client.get(f"/contents/{world.alice_post.uuid}", headers=headers)

    assert resp.status_code == 401
    assert resp.json()["code"] == "1003"


def test_unsupported_version_behaves_like_unknown_route(client, world):
    resp = client.get(
        f"/contents/{world.alice_post.uuid}",
        headers=auth_headers("alice-token", **{"Accept-Version": "2.0"}),
    )

    assert resp.status_code == 404
    assert resp.json()["code"] == "1002"


def test_missing_authorization(client, world):
    resp = client.get(f"/contents/{world.alice_post.uuid}", headers=HEADERS)

    assert resp.status_code == 401
    assert resp.json()["code"] == "1003"


def test_unknown_access_token(client, world):
    resp = client.get(f"/contents/{world.alice_post.uuid}", headers=auth_headers("stolen-token"))

    assert resp.status_code == 401
    assert resp.json()["code"] == "1004"


def test_root_banner(client):
    resp = client.get("/")

    assert resp.status_code == 200
    assert resp.json()["version"] == "1.0"
