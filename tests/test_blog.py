"""Tests for the /api/blog endpoints."""

import threading

import pytest

from mcphub.catalog.handlers import BlogHandler, make_excerpt, slugify


def slugs(response):
    return [post["slug"] for post in response.json()["data"]]


def new_post(**overrides):
    payload = {"title": "Hello World!", "content": "Short body", "author": "Sam"}
    payload.update(overrides)
    return payload


@pytest.mark.parametrize("title, slug", [
    ("Hello World!", "hello-world"),
    ("  Building Custom AI Tools: A Developer's Guide ", "building-custom-ai-tools-a-developer-s-guide"),
    ("--MCP -- 2.0--", "mcp-2-0"),
])
def test_slugify(title, slug):
    assert slugify(title) == slug


def test_make_excerpt():
    assert make_excerpt("x" * 250) == "x" * 200 + "..."
    assert make_excerpt("x" * 200) == "x" * 200


class TestListPosts:
    def test_published_posts_newest_first(self, client):
        response = client.get("/api/blog")
        assert response.status_code == 200
        assert slugs(response) == [
            "getting-started-with-mcp-tools",
            "building-custom-ai-tools-guide",
            "future-of-ai-tool-integration",
        ]
        assert response.json()["meta"] == {"total": 3, "page": 1, "limit": 10}

    def test_drafts_hidden_by_default(self, client):
        client.post("/api/blog", json=new_post())
        assert client.get("/api/blog").json()["meta"]["total"] == 3
        assert slugs(client.get("/api/blog", params={"published": "false"})) == ["hello-world"]
        everything = client.get("/api/blog", params={"published": "all"})
        assert everything.json()["meta"]["total"] == 4
        assert slugs(everything)[0] == "hello-world"

    def test_tag_filter_is_substring(self, client):
        response = client.get("/api/blog", params={"tag": "TUTOR"})
        assert slugs(response) == ["getting-started-with-mcp-tools", "building-custom-ai-tools-guide"]

    def test_pagination(self, client):
        body = client.get("/api/blog", params={"limit": 1, "offset": 1}).json()
        assert [p["slug"] for p in body["data"]] == ["building-custom-ai-tools-guide"]
        assert body["meta"] == {"total": 3, "page": 2, "limit": 1}


class TestGetPost:
    def test_by_slug(self, client):
        response = client.get("/api/blog/future-of-ai-tool-integration")
        assert response.status_code == 200
        assert response.json()["data"]["author"] == "Dr. Emily Watson"

    def test_missing_slug(self, client):
        response = client.get("/api/blog/nothing-here")
        assert response.status_code == 404
        assert response.json()["error"] == "Blog post not found"


class TestCreatePost:
    def test_slug_and_defaults(self, client):
        response = client.post("/api/blog", json=new_post())
        assert response.status_code == 201
        post = response.json()["data"]
        assert post["slug"] == "hello-world"
        assert post["published"] is False
        assert post["excerpt"] == "Short body"

    def test_long_content_gets_truncated_excerpt(self, client):
        content = "word " * 100
        post = client.post("/api/blog", json=new_post(content=content)).json()["data"]
        assert post["excerpt"] == content[:200] + "..."

    def test_explicit_excerpt_is_kept(self, client):
        post = client.post("/api/blog", json=new_post(excerpt="Teaser", published=True)).json()["data"]
        assert post["excerpt"] == "Teaser"
        assert post["published"] is True

    def test_colliding_slugs_get_suffixes(self, client):
        first = client.post("/api/blog", json=new_post()).json()["data"]
        second = client.post("/api/blog", json=new_post(title="hello, world")).json()["data"]
        third = client.post("/api/blog", json=new_post()).json()["data"]
        assert [first["slug"], second["slug"], third["slug"]] == ["hello-world", "hello-world-2", "hello-world-3"]

    def test_missing_fields(self, client, store):
        response = client.post("/api/blog", json={"title": "Only a title"})
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields: content, author"
        assert len(store.blog) == 3

    def test_title_without_letters_or_digits(self, client):
        response = client.post("/api/blog", json=new_post(title="!!!"))
        assert response.status_code == 400


class TestUpdatePost:
    def test_update_keeps_slug(self, client):
        response = client.put(
            "/api/blog/getting-started-with-mcp-tools",
            json={"title": "Renamed", "slug": "renamed", "published": False},
        )
        assert response.status_code == 200
        post = response.json()["data"]
        assert post["title"] == "Renamed"
        assert post["slug"] == "getting-started-with-mcp-tools"
        assert post["published"] is False

    def test_update_missing(self, client):
        assert client.put("/api/blog/missing", json={"title": "X"}).status_code == 404


def test_featured_image_is_stored(client):
    post = client.post("/api/blog", json=new_post(featured_image="https://example.com/cover.png")).json()["data"]
    assert post["featured_image"] == "https://example.com/cover.png"
    seeded = client.get("/api/blog/getting-started-with-mcp-tools").json()["data"]
    assert seeded["featured_image"].startswith("https://images.unsplash.com/")


def test_concurrent_creates_never_share_a_slug(store, settings):
    handler = BlogHandler(store.blog, settings)
    workers = 8

    for _ in range(20):
        barrier = threading.Barrier(workers)
        results = []

        def create():
            barrier.wait()
            results.append(handler.create(new_post(title="Race Condition")))

        threads = [threading.Thread(target=create) for _ in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert all(reply.status_code == 201 for reply in results)

    slugs_stored = [p.slug for p in store.blog.all()]
    assert len(slugs_stored) == len(set(slugs_stored))
    assert len(slugs_stored) == 3 + 20 * workers
