import asyncio

from blogstudio.posts import database as posts_db


#============================================
def create_post(client, headers, title="Post", published=True, **extra):
    body = {
        "title": title,
        "content": f"<p>{title} body</p>",
        "slug": title.lower().replace(" ", "-"),
        "published": published,
        **extra,
    }
    response = client.post("/api/posts", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


#============================================
def rate(client, headers, post_id, value):
    return client.post("/api/posts/rate", json={"postId": post_id, "value": value}, headers=headers)


#============================================
def test_public_listing_needs_no_auth(client) -> None:
    response = client.get("/api/posts")
    assert response.status_code == 200
    assert response.json() == []


#============================================
def test_create_post_requires_auth_and_fields(client, alice) -> None:
    body = {"title": "T", "content": "C", "slug": "t"}
    assert client.post("/api/posts", json=body).status_code == 401

    missing_slug = client.post("/api/posts", json={"title": "T", "content": "C"}, headers=alice)
    assert missing_slug.status_code == 400
    assert missing_slug.json()["detail"] == "Title, content, and slug are required"


#============================================
def test_create_published_post(client, alice) -> None:
    post = create_post(client, alice, title="Launch", summary="Short")
    assert post["published"] is True
    assert post["publishedAt"]
    assert post["summary"] == "Short"
    assert post["authorUsername"] == "alice"
    assert post["averageRating"] == 0
    assert post["ratingCount"] == 0

    listed = client.get("/api/posts").json()
    assert [p["id"] for p in listed] == [post["id"]]


#============================================
def test_unpublished_post_is_private(client, alice, bob) -> None:
    """
    Unpublished posts are hidden from the listing and from everyone but the author.
    """
    post = create_post(client, alice, title="Secret", published=False)
    assert post["published"] is False
    assert post["publishedAt"] is None
    assert client.get("/api/posts").json() == []

    assert client.get(f"/api/posts?id={post['id']}", headers=alice).status_code == 200
    assert client.get(f"/api/posts?id={post['id']}", headers=bob).status_code == 404
    assert client.get(f"/api/posts?id={post['id']}").status_code == 404


#============================================
def test_post_sort_latest_and_earliest(client, alice) -> None:
    for title in ("One", "Two", "Three"):
        create_post(client, alice, title=title)

    latest = [p["title"] for p in client.get("/api/posts?sort=latest").json()]
    earliest = [p["title"] for p in client.get("/api/posts?sort=earliest").json()]
    assert latest == ["Three", "Two", "One"]
    assert earliest == ["One", "Two", "Three"]
    assert [p["title"] for p in client.get("/api/posts").json()] == latest


#============================================
def test_highest_rated_without_ratings_matches_latest(client, alice) -> None:
    for title in ("One", "Two", "Three"):
        create_post(client, alice, title=title)

    latest = client.get("/api/posts?sort=latest").json()
    highest = client.get("/api/posts?sort=highest-rated").json()
    assert [p["id"] for p in highest] == [p["id"] for p in latest]


#============================================
def test_highest_rated_orders_by_average(client, alice, bob) -> None:
    """
    Rated posts come first by average; unrated ones follow by recency.
    """
    one = create_post(client, alice, title="One")
    two = create_post(client, alice, title="Two")
    three = create_post(client, alice, title="Three")
    four = create_post(client, alice, title="Four")

    rate(client, alice, one["id"], 5)
    rate(client, alice, three["id"], 2)
    rate(client, bob, three["id"], 4)

    highest = client.get("/api/posts?sort=highest-rated").json()
    assert [p["title"] for p in highest] == ["One", "Three", "Four", "Two"]
    assert highest[1]["averageRating"] == 3
    assert highest[1]["ratingCount"] == 2
    assert two["id"] and four["id"]


#============================================
def test_rating_upsert_keeps_one_rating_per_user(client, alice, bob) -> None:
    post = create_post(client, alice)

    first = rate(client, bob, post["id"], 2)
    assert first.status_code == 200
    second = rate(client, bob, post["id"], 5)
    assert second.status_code == 200
    assert second.json()["value"] == 5
    assert second.json()["id"] == first.json()["id"]

    summary = client.get(f"/api/posts/ratings?postId={post['id']}", headers=bob).json()
    assert summary == {"average": 5, "count": 1, "userRating": 5}


#============================================
def test_rating_average(client, alice, bob) -> None:
    post = create_post(client, alice)
    rate(client, alice, post["id"], 3)
    rate(client, bob, post["id"], 5)

    summary = client.get(f"/api/posts/ratings?postId={post['id']}", headers=alice).json()
    assert summary == {"average": 4, "count": 2, "userRating": 3}

    anonymous = client.get(f"/api/posts/ratings?postId={post['id']}").json()
    assert anonymous["userRating"] is None
    assert anonymous["count"] == 2


#============================================
def test_unrated_post_summary(client, alice) -> None:
    post = create_post(client, alice)
    summary = client.get(f"/api/posts/ratings?postId={post['id']}").json()
    assert summary == {"average": 0, "count": 0, "userRating": None}


#============================================
def test_rating_validation(client, alice) -> None:
    post = create_post(client, alice)

    assert rate(client, alice, post["id"], 0).status_code == 400
    assert rate(client, alice, post["id"], 6).status_code == 400
    assert rate(client, alice, None, 3).status_code == 400
    assert rate(client, alice, post["id"], "lots").status_code == 400
    assert rate(client, alice, 9999, 3).status_code == 404
    assert client.post("/api/posts/rate", json={"postId": post["id"], "value": 3}).status_code == 401

    assert client.get("/api/posts/ratings").status_code == 400


#============================================
def test_delete_post_by_owner_only(client, alice, bob) -> None:
    """
    Non-owners get 404 and the post survives.
    """
    post = create_post(client, alice)

    assert client.delete("/api/posts", headers=alice).status_code == 400
    assert client.delete(f"/api/posts?id={post['id']}", headers=bob).status_code == 404
    assert len(client.get("/api/posts").json()) == 1

    response = client.delete(f"/api/posts?id={post['id']}", headers=alice)
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get("/api/posts").json() == []
    assert client.delete(f"/api/posts?id={post['id']}", headers=alice).status_code == 404


#============================================
def test_deleting_post_removes_its_ratings(client, alice, bob) -> None:
    post = create_post(client, alice)
    rate(client, bob, post["id"], 4)

    client.delete(f"/api/posts?id={post['id']}", headers=alice)

    assert client.get(f"/api/posts/ratings?postId={post['id']}").status_code == 404
    summary = asyncio.run(posts_db.get_rating_summary(post["id"]))
    assert summary["count"] == 0


#============================================
def test_update_post_publish_toggle(client, alice, bob) -> None:
    post = create_post(client, alice, title="Toggle")

    hidden = client.put(f"/api/posts?id={post['id']}", json={"published": False}, headers=alice)
    assert hidden.status_code == 200
    assert hidden.json()["published"] is False
    assert hidden.json()["publishedAt"] is None
    assert hidden.json()["title"] == "Toggle"
    assert client.get("/api/posts").json() == []

    shown = client.put(
        f"/api/posts?id={post['id']}",
        json={"published": True, "title": "Toggled"},
        headers=alice,
    )
    assert shown.json()["published"] is True
    assert shown.json()["publishedAt"]
    assert shown.json()["title"] == "Toggled"

    assert client.put(f"/api/posts?id={post['id']}", json={"title": "Mine"}, headers=bob).status_code == 404
    assert client.put(f"/api/posts?id={post['id']}", json={"title": "  "}, headers=alice).status_code == 400
    assert client.put("/api/posts", json={"title": "x"}, headers=alice).status_code == 400


#============================================
def test_unpublished_post_cannot_be_rated_by_others(client, alice, bob) -> None:
    """
    Ratings of a hidden post behave as if the post did not exist.
    """
    post = create_post(client, alice, title="Secret", published=False)

    assert rate(client, bob, post["id"], 1).status_code == 404
    assert client.get(f"/api/posts/ratings?postId={post['id']}", headers=bob).status_code == 404
    assert client.get(f"/api/posts/ratings?postId={post['id']}").status_code == 404

    own = rate(client, alice, post["id"], 4)
    assert own.status_code == 200
    summary = client.get(f"/api/posts/ratings?postId={post['id']}", headers=alice).json()
    assert summary == {"average": 4, "count": 1, "userRating": 4}


#============================================
def test_ratings_of_unknown_post_not_found(client) -> None:
    assert client.get("/api/posts/ratings?postId=9999").status_code == 404
