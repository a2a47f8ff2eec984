"""
Blog API Backend — Article Route Tests
========================================

What:  HTTP-level tests for the home feed, article listing, creation,
       comments, likes/dislikes and deletion.
How:   HTTPX AsyncClient against an app backed by a temporary SQLite file.
"""

import pytest
import pytest_asyncio


@pytest_asyncio.fixture
async def author(test_client, sample_user, auth):
    """Registers the sample user and returns their auth headers."""
    response = await test_client.post("/user", json=sample_user)
    assert response.status_code == 201
    return auth


async def _create_article(client, headers, content="hello world"):
    response = await client.post("/articles/create", json={"content": content}, headers=headers)
    assert response.status_code == 201
    listing = await client.get("/articles", headers=headers)
    return listing.json()[-1]


class TestHomeFeed:

    @pytest.mark.asyncio
    async def test_empty_feed_is_empty_array(self, test_client):
        response = await test_client.get("/home")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_feed_is_five_newest_first(self, test_client, author):
        for i in range(7):
            await test_client.post("/articles/create", json={"content": f"post {i}"}, headers=author)

        response = await test_client.get("/home")

        articles = response.json()
        assert [a["content"] for a in articles] == ["post 6", "post 5", "post 4", "post 3", "post 2"]
        ids = [a["id"] for a in articles]
        assert ids == sorted(ids, reverse=True)

    @pytest.mark.asyncio
    async def test_feed_needs_no_email(self, test_client, author):
        await _create_article(test_client, author)

        response = await test_client.get("/home")
        assert len(response.json()) == 1

    @pytest.mark.asyncio
    async def test_post_is_method_not_allowed(self, test_client):
        response = await test_client.post("/home")
        assert response.status_code == 405


class TestCreateArticle:

    @pytest.mark.asyncio
    async def test_created_article_appears_in_home_and_author_list(self, test_client, author):
        response = await test_client.post(
            "/articles/create", json={"content": "first post"}, headers=author
        )
        assert response.status_code == 201

        home = (await test_client.get("/home")).json()
        mine = (await test_client.get("/articles", headers=author)).json()

        assert [a["content"] for a in home] == ["first post"]
        assert mine == home
        assert mine[0]["likes"] == 0

    @pytest.mark.asyncio
    async def test_client_supplied_owner_and_likes_are_ignored(self, test_client, author):
        await test_client.post(
            "/articles/create",
            json={"content": "sneaky", "user_id": 999, "likes": 100},
            headers=author,
        )

        article = (await test_client.get("/articles", headers=author)).json()[0]
        assert article["user_id"] != 999
        assert article["likes"] == 0

    @pytest.mark.asyncio
    async def test_missing_email_is_unauthorized(self, test_client):
        response = await test_client.post("/articles/create", json={"content": "x"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_author_is_internal_error(self, test_client):
        response = await test_client.post(
            "/articles/create", json={"content": "x"}, headers={"Email": "ghost@example.com"}
        )
        assert response.status_code == 500

    @pytest.mark.asyncio
    async def test_malformed_json_is_bad_request(self, test_client, author):
        response = await test_client.post(
            "/articles/create",
            content=b"{content: unquoted}",
            headers={**author, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.text == "Invalid JSON format"

    @pytest.mark.asyncio
    async def test_delete_is_method_not_allowed(self, test_client, author):
        response = await test_client.delete("/articles/create", headers=author)

        assert response.status_code == 405
        assert response.headers["allow"] == "POST"

    @pytest.mark.asyncio
    async def test_json_array_body_is_bad_request(self, test_client, author):
        response = await test_client.post("/articles/create", json=["x"], headers=author)
        assert response.status_code == 400


class TestListArticles:

    @pytest.mark.asyncio
    async def test_missing_email_is_unauthorized(self, test_client):
        response = await test_client.get("/articles")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_user_without_articles_gets_empty_array(self, test_client, author):
        response = await test_client.get("/articles", headers=author)

        assert response.status_code == 200
        assert response.json() == []


class TestLikes:

    @pytest.mark.asyncio
    async def test_each_like_adds_exactly_one(self, test_client, author):
        article = await _create_article(test_client, author)

        for _ in range(3):
            response = await test_client.post(f"/articles/{article['id']}/like", headers=author)
            assert response.status_code == 200
            assert response.content == b""

        updated = (await test_client.get("/articles", headers=author)).json()[0]
        assert updated["likes"] == 3

    @pytest.mark.asyncio
    async def test_dislikes_can_go_negative(self, test_client, author):
        article = await _create_article(test_client, author)

        await test_client.post(f"/articles/{article['id']}/like", headers=author)
        for _ in range(3):
            response = await test_client.post(f"/articles/{article['id']}/dislike", headers=author)
            assert response.status_code == 200

        updated = (await test_client.get("/articles", headers=author)).json()[0]
        assert updated["likes"] == -2

    @pytest.mark.asyncio
    async def test_any_user_may_like(self, test_client, author):
        article = await _create_article(test_client, author)

        response = await test_client.post(
            f"/articles/{article['id']}/like", headers={"Email": "stranger@example.com"}
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_like_without_email_is_unauthorized(self, test_client, author):
        article = await _create_article(test_client, author)

        response = await test_client.post(f"/articles/{article['id']}/like")
        assert response.status_code == 401

    @pytest.mark.asyncio
    @pytest.mark.parametrize("action", ["like", "dislike"])
    async def test_non_integer_id_is_bad_request(self, test_client, author, action):
        response = await test_client.post(f"/articles/abc/{action}", headers=author)

        assert response.status_code == 400
        assert response.text == "Invalid article_id parameter"

    @pytest.mark.asyncio
    async def test_get_is_method_not_allowed(self, test_client, author):
        response = await test_client.get("/articles/1/like", headers=author)
        assert response.status_code == 405


class TestOutOfRangeIds:

    TOO_LARGE = "99999999999999999999"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, path",
        [
            ("POST", "/articles/{id}/like"),
            ("POST", "/articles/{id}/dislike"),
            ("DELETE", "/articles/{id}"),
        ],
    )
    async def test_id_wider_than_column_is_bad_request(self, test_client, author, method, path):
        response = await test_client.request(method, path.format(id=self.TOO_LARGE), headers=author)

        assert response.status_code == 400
        assert response.text == "Invalid article_id parameter"
        assert "X-Request-ID" in response.headers

    @pytest.mark.asyncio
    async def test_comment_id_wider_than_column_is_bad_request(self, test_client, author):
        response = await test_client.post(
            f"/articles/{self.TOO_LARGE}/comment", json={"content": "x"}, headers=author
        )

        assert response.status_code == 400
        assert response.text == "Invalid article_id parameter"

    @pytest.mark.asyncio
    async def test_negative_id_wider_than_column_is_bad_request(self, test_client, author):
        response = await test_client.post(f"/articles/-{self.TOO_LARGE}/like", headers=author)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_largest_column_id_is_accepted(self, test_client, author):
        response = await test_client.post(f"/articles/{2**31 - 1}/like", headers=author)
        assert response.status_code == 200


class TestComments:

    @pytest.mark.asyncio
    async def test_comment_is_created(self, test_client, author):
        article = await _create_article(test_client, author)

        response = await test_client.post(
            f"/articles/{article['id']}/comment", json={"content": "nice"}, headers=author
        )

        assert response.status_code == 201
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_comment_on_missing_article_is_internal_error(self, test_client, author):
        response = await test_client.post(
            "/articles/4242/comment", json={"content": "hello?"}, headers=author
        )
        assert response.status_code == 500

    @pytest.mark.asyncio
    async def test_malformed_json_is_bad_request(self, test_client, author):
        article = await _create_article(test_client, author)

        response = await test_client.post(
            f"/articles/{article['id']}/comment",
            content=b"not json",
            headers={**author, "Content-Type": "application/json"},
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_non_integer_id_is_bad_request(self, test_client, author):
        response = await test_client.post(
            "/articles/first/comment", json={"content": "x"}, headers=author
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_email_is_unauthorized(self, test_client, author):
        article = await _create_article(test_client, author)

        response = await test_client.post(
            f"/articles/{article['id']}/comment", json={"content": "x"}
        )
        assert response.status_code == 401


class TestDeleteArticle:

    @pytest.mark.asyncio
    async def test_deleted_article_disappears_from_listing(self, test_client, author):
        keep = await _create_article(test_client, author, "keep")
        drop = await _create_article(test_client, author, "drop")

        response = await test_client.delete(f"/articles/{drop['id']}", headers=author)
        assert response.status_code == 200

        remaining = (await test_client.get("/articles", headers=author)).json()
        assert [a["id"] for a in remaining] == [keep["id"]]

    @pytest.mark.asyncio
    async def test_delete_article_with_comments(self, test_client, author):
        article = await _create_article(test_client, author)
        await test_client.post(
            f"/articles/{article['id']}/comment", json={"content": "nice"}, headers=author
        )

        response = await test_client.delete(f"/articles/{article['id']}", headers=author)

        assert response.status_code == 200
        assert (await test_client.get("/home")).json() == []

    @pytest.mark.asyncio
    async def test_delete_without_email_is_unauthorized(self, test_client, author):
        article = await _create_article(test_client, author)

        response = await test_client.delete(f"/articles/{article['id']}")

        assert response.status_code == 401
        assert len((await test_client.get("/home")).json()) == 1

    @pytest.mark.asyncio
    async def test_non_integer_id_is_bad_request(self, test_client, author):
        response = await test_client.delete("/articles/xyz", headers=author)
        assert response.status_code == 400


class TestResponseHeaders:

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, test_client):
        response = await test_client.get("/home")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_is_echoed_on_errors(self, test_client):
        response = await test_client.get("/articles", headers={"X-Request-ID": "trace-123"})

        assert response.status_code == 401
        assert response.headers["X-Request-ID"] == "trace-123"
