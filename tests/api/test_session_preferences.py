"""
HTTP tests for session-scoped sort and filter preferences.

A request parameter overrides the stored value for that dimension, and the
value used is remembered by the session for the next request.
"""


def _add(client, external_id):
    response = client.put("/books", data={"id": external_id})
    assert response.status_code == 200, response.text
    return response.json()


def _titles(response):
    assert response.status_code == 200, response.text
    return [b["title"] for b in response.json()]


class TestCatalogPage:
    def test_first_visit_lists_all_books_by_pk(self, client):
        """Scenario: no stored preference and no parameters."""
        dune = _add(client, "12345")
        cosmos = _add(client, "555")

        response = client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        page = response.text
        assert page.index("Dune") < page.index("Cosmos")
        assert f'id="book-{dune["pk"]}"' in page
        assert f'id="book-{cosmos["pk"]}"' in page

    def test_page_remembers_sort_choice(self, client):
        _add(client, "12345")
        _add(client, "555")

        client.get("/", params={"sortBy": "title"})
        page = client.get("/").text

        assert page.index("Cosmos") < page.index("Dune")

    def test_page_rejects_invalid_sort(self, client):
        assert client.get("/", params={"sortBy": "nope"}).status_code == 400


class TestBooksPreference:
    def test_sort_choice_is_remembered(self, client):
        _add(client, "12345")
        _add(client, "555")

        assert _titles(client.get("/books", params={"sortBy": "title"})) == ["Cosmos", "Dune"]
        assert _titles(client.get("/books")) == ["Cosmos", "Dune"]

    def test_filter_choice_is_remembered_and_combines_with_sort(self, client):
        _add(client, "12345")
        _add(client, "555")
        _add(client, "800")

        client.get("/books", params={"sortBy": "title"})
        assert _titles(client.get("/books", params={"filter": "fiction"})) == ["Dune", "Lower Bound"]

        # Both dimensions are remembered
        assert _titles(client.get("/books")) == ["Dune", "Lower Bound"]

    def test_parameter_overrides_stored_value(self, client):
        _add(client, "12345")
        _add(client, "555")

        client.get("/books", params={"filter": "fiction"})

        assert _titles(client.get("/books", params={"filter": "all"})) == ["Dune", "Cosmos"]
        assert _titles(client.get("/books")) == ["Dune", "Cosmos"]

    def test_preference_shared_between_page_and_api(self, client):
        _add(client, "12345")
        _add(client, "555")

        client.get("/", params={"filter": "nonfiction"})

        assert _titles(client.get("/books")) == ["Cosmos"]

    def test_invalid_parameter_leaves_stored_preference(self, client):
        _add(client, "12345")
        _add(client, "555")
        client.get("/books", params={"sortBy": "title"})

        assert client.get("/books", params={"sortBy": "owner"}).status_code == 400

        assert _titles(client.get("/books")) == ["Cosmos", "Dune"]
