import pytest

from conftest import FakeAugmenter, auth_headers


def create_post(client, headers, title="Aphids on roses", content="Neem oil spray works", **fields):
    response = client.post("/api/community/posts", headers=headers, json={"title": title, "content": content, **fields})
    assert response.status_code == 201, response.text
    return response.json()["post"]


@pytest.fixture
def augmenter():
    return FakeAugmenter(tags=["pests"], category="pest-control", suggestions=["neem oil"])


def test_create_post_fills_tags_and_category(client):
    headers = auth_headers(client, "alice")

    response = client.post("/api/community/posts", headers=headers, json={"title": "Aphids", "content": "Help!"})
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Post created successfully"
    post = body["post"]
    assert post["authorName"] == "alice"
    assert post["tags"] == ["pests"]
    assert post["category"] == "pest-control"
    assert post["likes"] == 0
    assert post["commentCount"] == 0
    assert post["comments"] == []


def test_create_post_validation_and_auth(client):
    assert client.post("/api/community/posts", json={"title": "t", "content": "c"}).status_code == 401

    headers = auth_headers(client)
    response = client.post("/api/community/posts", headers=headers, json={"title": "", "content": "c"})
    assert response.status_code == 400
    assert response.json()["error"] == "Title is required"


def test_reading_posts_is_public(client):
    post = create_post(client, auth_headers(client))

    assert client.get("/api/community/posts").json()["total"] == 1
    assert client.get(f"/api/community/posts/{post['id']}").json()["post"]["title"] == "Aphids on roses"
    assert client.get("/api/community/posts/missing").status_code == 404


def test_like_and_comment(client):
    alice = auth_headers(client, "alice")
    bob = auth_headers(client, "bobby")
    post = create_post(client, alice)

    for expected in (1, 2, 3):
        liked = client.post(f"/api/community/posts/{post['id']}/like", headers=bob)
        assert liked.json() == {"success": True, "message": "Post liked successfully", "likes": expected}

    comment = client.post(f"/api/community/posts/{post['id']}/comment", headers=bob, json={"content": "Thanks!"})
    assert comment.status_code == 201
    assert comment.json()["comment"]["authorName"] == "bobby"

    assert client.post(f"/api/community/posts/{post['id']}/comment", headers=bob, json={"content": ""}).status_code == 400
    assert client.post("/api/community/posts/missing/like", headers=bob).status_code == 404

    stored = client.get(f"/api/community/posts/{post['id']}").json()["post"]
    assert stored["likes"] == 3
    assert stored["commentCount"] == len(stored["comments"]) == 1


def test_only_author_edits_or_deletes(client):
    alice = auth_headers(client, "alice")
    bob = auth_headers(client, "bobby")
    post = create_post(client, alice)

    forbidden = client.put(f"/api/community/posts/{post['id']}", headers=bob, json={"title": "Mine now"})
    assert forbidden.status_code == 403
    assert forbidden.json()["code"] == "AUTHORIZATION_ERROR"
    assert client.delete(f"/api/community/posts/{post['id']}", headers=bob).status_code == 403

    edited = client.put(f"/api/community/posts/{post['id']}", headers=alice, json={"title": "Aphids solved"})
    assert edited.status_code == 200
    assert edited.json()["post"]["title"] == "Aphids solved"
    assert edited.json()["post"]["content"] == "Neem oil spray works"

    assert client.delete(f"/api/community/posts/{post['id']}", headers=alice).status_code == 200
    assert client.get(f"/api/community/posts/{post['id']}").status_code == 404


def test_list_filters_and_rejects_unknown_sort(client):
    headers = auth_headers(client)
    create_post(client, headers, title="One", category="seasonal-care")
    create_post(client, headers, title="Two", category="pest-control")

    listing = client.get("/api/community/posts", params={"category": "seasonal-care"}).json()
    assert [post["title"] for post in listing["posts"]] == ["One"]

    by_title = client.get("/api/community/posts", params={"sortBy": "title", "order": "asc"}).json()
    assert [post["title"] for post in by_title["posts"]] == ["One", "Two"]

    bad = client.get("/api/community/posts", params={"sortBy": "popularity"})
    assert bad.status_code == 400


def test_search_with_insights(client, augmenter):
    headers = auth_headers(client)
    create_post(client, headers, title="Tomato blight", content="Copper spray")
    create_post(client, headers, title="Tomato staking", content="Use cages")
    create_post(client, headers, title="Roses", content="Prune in winter")
    augmenter.relevance = {"Tomato blight": 0.9, "Tomato staking": 0.4}

    body = client.get("/api/community/search", params={"q": "tomato"}).json()

    assert body["query"] == "tomato"
    assert body["total"] == 2
    assert [hit["title"] for hit in body["results"]] == ["Tomato blight", "Tomato staking"]
    assert body["results"][0]["aiInsights"]["relevanceScore"] == 0.9
    assert body["suggestions"] == ["neem oil"]


def test_search_degrades_without_augmenter(client, augmenter):
    headers = auth_headers(client)
    create_post(client, headers, title="Tomato blight", content="Copper spray")
    augmenter.fail = True

    body = client.get("/api/community/search", params={"q": "tomato"}).json()

    assert body["total"] == 1
    assert body["results"][0]["aiInsights"] is None
    assert body["suggestions"] == []


def test_search_and_suggestions_require_query(client):
    assert client.get("/api/community/search").status_code == 400
    assert client.get("/api/community/suggestions", params={"q": " "}).status_code == 400
    assert client.get("/api/community/suggestions", params={"q": "neem"}).json() == {
        "success": True,
        "query": "neem",
        "suggestions": ["neem oil"],
    }


def test_rankings_and_aggregates(client):
    alice = auth_headers(client, "alice")
    quiet = create_post(client, alice, title="Quiet", category="seasonal-care")
    popular = create_post(client, alice, title="Popular", category="pest-control")
    chatty = create_post(client, alice, title="Chatty", category="pest-control")
    for _ in range(3):
        client.post(f"/api/community/posts/{popular['id']}/like", headers=alice)
    for _ in range(5):
        client.post(f"/api/community/posts/{chatty['id']}/comment", headers=alice, json={"content": "+1"})

    trending = client.get("/api/community/trending", params={"limit": 1}).json()
    assert [post["id"] for post in trending["posts"]] == [popular["id"]]

    engagement = client.get("/api/community/engagement").json()
    assert [post["id"] for post in engagement["posts"]] == [chatty["id"], popular["id"], quiet["id"]]

    categories = client.get("/api/community/categories").json()
    assert categories["categories"] == [
        {"category": "pest-control", "count": 2},
        {"category": "seasonal-care", "count": 1},
    ]
    assert len(categories["availableCategories"]) == 6

    stats = client.get("/api/community/stats").json()["stats"]
    assert stats == {"totalPosts": 3, "totalCategories": 2, "totalLikes": 3, "totalComments": 5}


def test_insights_and_trending_topics(client, augmenter):
    assert client.get("/api/community/insights").json()["insights"] == {"popular_topics": ["basil"], "post_count": 0}
    assert client.get("/api/community/trending/topics").json()["trendingTopics"][0]["topic"] == "Basil"

    augmenter.fail = True
    fallback = client.get("/api/community/insights").json()["insights"]
    assert "popular_topics" in fallback
    assert len(client.get("/api/community/trending/topics").json()["trendingTopics"]) == 3
