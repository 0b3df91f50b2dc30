"""End-to-end tests of the generic resource endpoints."""

import json
from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from libris.db.models import Author, Book, Role, RoleEntitlement, UserInRole
from tests.factories import auth_headers, create_author, create_book, create_role, create_user

pytestmark = pytest.mark.integration


def filters(*conditions):
    return {"filters": json.dumps([
        {"Property": p, "Operator": o, "Value": v} for p, o, v in conditions
    ])}


class TestAuthentication:

    def test_missing_token(self, client):
        response = client.get("/api/books")
        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHENTICATED"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_token(self, client):
        response = client.get("/api/books", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    def test_inactive_user(self, client, db_session):
        role = create_role(db_session, grants=[("Books", "Read")])
        user = create_user(db_session, is_active=False, roles=[role])
        db_session.commit()
        assert client.get("/api/books", headers=auth_headers(user)).status_code == 401

    def test_user_without_roles_is_forbidden(self, client, headers_for):
        response = client.get("/api/books", headers=headers_for())
        assert response.status_code == 403
        assert response.json()["error"] == "FORBIDDEN"


class TestEntitlementGating:

    def test_editor_can_update_but_not_delete(self, client, db_session, headers_for):
        book = create_book(db_session, title="Animal Farm")
        db_session.commit()
        book_id = str(book.id)
        headers = headers_for([("Books", "Update")], role_name="Editor")

        response = client.put(f"/api/books/{book_id}", json={"Id": book_id, "Title": "Animal Farm (2nd ed.)"}, headers=headers)
        assert response.status_code == 200
        assert response.json() == 1

        response = client.delete(f"/api/books/{book_id}", headers=headers)
        assert response.status_code == 403
        assert response.json()["details"] == {"resource": "Books", "action": "Delete"}

        db_session.expire_all()
        assert db_session.get(Book, book.id).title == "Animal Farm (2nd ed.)"

    def test_forbidden_before_not_found(self, client, headers_for):
        headers = headers_for([("Books", "Read")])
        response = client.delete(f"/api/books/{uuid4()}", headers=headers)
        assert response.status_code == 403

    def test_grants_are_per_resource(self, client, headers_for):
        headers = headers_for([("Books", "Read")])
        assert client.get("/api/books", headers=headers).status_code == 200
        assert client.get("/api/author", headers=headers).status_code == 403

    def test_read_covers_list_and_get(self, client, db_session, headers_for):
        author = create_author(db_session, name="Orwell")
        db_session.commit()
        headers = headers_for([("Author", "Read")])
        assert client.get("/api/author", headers=headers).status_code == 200
        assert client.get(f"/api/author/{author.id}", headers=headers).status_code == 200
        assert client.post("/api/author", json={"Name": "Huxley", "Year": 1932}, headers=headers).status_code == 403

    def test_any_role_can_grant(self, client, db_session):
        readers = create_role(db_session, grants=[("Author", "Read")])
        creators = create_role(db_session, grants=[("Author", "Create")])
        user = create_user(db_session, roles=[readers, creators])
        db_session.commit()
        headers = auth_headers(user)

        assert client.post("/api/author", json={"Name": "Huxley", "Year": 1932}, headers=headers).status_code == 200
        assert client.get("/api/author", headers=headers).status_code == 200
        assert client.delete(f"/api/author/{uuid4()}", headers=headers).status_code == 403


class TestAuthorCrud:

    @pytest.fixture
    def headers(self, headers_for):
        return headers_for([("Author", action) for action in ("Create", "Read", "Update", "Delete")])

    def test_create_returns_count(self, client, db_session, headers):
        response = client.post(
            "/api/author",
            json={"Name": "George Orwell", "Year": 1945, "Nationality": "British", "BirthDate": "1903-06-25"},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json() == 1

        stored = db_session.query(Author).one()
        assert stored.name == "George Orwell"
        assert stored.birth_date == date(1903, 6, 25)
        assert stored.id is not None

    def test_create_validates_payload(self, client, headers):
        response = client.post("/api/author", json={"Year": 1945}, headers=headers)
        assert response.status_code == 422

    def test_get_by_id(self, client, db_session, headers):
        author = create_author(db_session, name="Orwell", year=1945)
        db_session.commit()

        response = client.get(f"/api/author/{author.id}", headers=headers)
        assert response.status_code == 200
        assert response.json() == {
            "Id": str(author.id), "Name": "Orwell", "Year": 1945, "Nationality": None, "BirthDate": None,
        }

    def test_get_missing(self, client, headers):
        response = client.get(f"/api/author/{uuid4()}", headers=headers)
        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

    def test_get_malformed_id(self, client, headers):
        assert client.get("/api/author/42", headers=headers).status_code == 422

    def test_update_overwrites_every_field(self, client, db_session, headers):
        author = create_author(db_session, name="Orwell", year=1945, nationality="British")
        db_session.commit()
        author_id = str(author.id)

        response = client.put(f"/api/author/{author_id}", json={"Id": author_id, "Name": "Eric Blair", "Year": 1949}, headers=headers)
        assert response.status_code == 200
        assert response.json() == 1

        db_session.expire_all()
        stored = db_session.get(Author, author.id)
        assert stored.name == "Eric Blair"
        assert stored.year == 1949
        assert stored.nationality is None

    def test_update_without_changes_counts_zero(self, client, db_session, headers):
        author = create_author(db_session, name="Orwell", year=1945)
        db_session.commit()
        author_id = str(author.id)

        response = client.put(f"/api/author/{author_id}", json={"Id": author_id, "Name": "Orwell", "Year": 1945}, headers=headers)
        assert response.status_code == 200
        assert response.json() == 0

    def test_update_identity_mismatch(self, client, db_session, headers):
        author = create_author(db_session, name="Orwell")
        db_session.commit()

        response = client.put(f"/api/author/{author.id}", json={"Id": str(uuid4()), "Name": "X", "Year": 1}, headers=headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Mismatched Id"

        db_session.expire_all()
        assert db_session.get(Author, author.id).name == "Orwell"

    def test_identity_checked_before_lookup(self, client, headers):
        response = client.put(f"/api/author/{uuid4()}", json={"Id": str(uuid4()), "Name": "X", "Year": 1}, headers=headers)
        assert response.status_code == 400
        assert response.json()["error"] == "IDENTITY_MISMATCH"

    def test_update_missing(self, client, headers):
        entity_id = str(uuid4())
        response = client.put(f"/api/author/{entity_id}", json={"Id": entity_id, "Name": "X", "Year": 1}, headers=headers)
        assert response.status_code == 404

    def test_delete(self, client, db_session, headers):
        author = create_author(db_session)
        db_session.commit()

        response = client.delete(f"/api/author/{author.id}", headers=headers)
        assert response.status_code == 200
        assert response.json() == 1

        db_session.expire_all()
        assert db_session.get(Author, author.id) is None
        assert client.delete(f"/api/author/{author.id}", headers=headers).status_code == 404

    def test_delete_counts_only_the_deleted_record(self, client, db_session, headers):
        author = create_author(db_session)
        book = create_book(db_session, author=author)
        db_session.commit()

        response = client.delete(f"/api/author/{author.id}", headers=headers)
        assert response.status_code == 200
        assert response.json() == 1

        db_session.expire_all()
        assert db_session.get(Book, book.id).author_id is None


class TestListFiltering:

    @pytest.fixture
    def headers(self, headers_for):
        return headers_for([("Author", "Read"), ("Books", "Read")])

    @pytest.fixture
    def authors(self, db_session):
        created = [
            create_author(db_session, name="Orwell", year=1945),
            create_author(db_session, name="Orwell", year=1949),
            create_author(db_session, name="Huxley", year=1932),
        ]
        db_session.commit()
        return created

    def test_no_filter_lists_everything(self, client, authors, headers):
        response = client.get("/api/author", headers=headers)
        assert response.status_code == 200
        assert len(response.json()) == 3

    def test_empty_filter_lists_everything(self, client, authors, headers):
        assert len(client.get("/api/author", params={"filters": "[]"}, headers=headers).json()) == 3
        assert len(client.get("/api/author", params={"filters": ""}, headers=headers).json()) == 3

    def test_and_of_conditions(self, client, authors, headers):
        response = client.get(
            "/api/author",
            params=filters(("Name", "Equal", "Orwell"), ("Year", "GreaterThan", "1946")),
            headers=headers,
        )
        assert response.status_code == 200
        assert [a["Year"] for a in response.json()] == [1949]

    def test_no_matches(self, client, authors, headers):
        response = client.get("/api/author", params=filters(("Name", "Equal", "Tolstoy")), headers=headers)
        assert response.status_code == 200
        assert response.json() == []

    def test_contains_ignores_case(self, client, authors, headers):
        response = client.get("/api/author", params=filters(("Name", "Contains", "XLE")), headers=headers)
        assert [a["Name"] for a in response.json()] == ["Huxley"]

    def test_contains_ignores_case_beyond_ascii(self, client, db_session, authors, headers):
        create_author(db_session, name="Émile Zola", year=1880)
        db_session.commit()
        for value in ("émile", "ÉMILE"):
            response = client.get("/api/author", params=filters(("Name", "Contains", value)), headers=headers)
            assert [a["Name"] for a in response.json()] == ["Émile Zola"]

    def test_unknown_property(self, client, authors, headers):
        response = client.get("/api/author", params=filters(("Genre", "Equal", "Satire")), headers=headers)
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_FILTER_FIELD"

    def test_property_names_are_case_sensitive(self, client, authors, headers):
        response = client.get("/api/author", params=filters(("name", "Equal", "Orwell")), headers=headers)
        assert response.status_code == 400

    def test_uncoercible_value(self, client, authors, headers):
        response = client.get("/api/author", params=filters(("Year", "GreaterThan", "recent")), headers=headers)
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_FILTER_VALUE"

    def test_malformed_json(self, client, authors, headers):
        response = client.get("/api/author", params={"filters": "[{"}, headers=headers)
        assert response.status_code == 400
        assert response.json()["error"] == "MALFORMED_FILTER"

    def test_grouping_rejected(self, client, authors, headers):
        raw = json.dumps([{"Or": [{"Property": "Name", "Operator": "Equal", "Value": "Orwell"}]}])
        response = client.get("/api/author", params={"filters": raw}, headers=headers)
        assert response.status_code == 400
        assert response.json()["error"] == "UNSUPPORTED_FILTER"

    def test_filter_errors_need_authorization_first(self, client, authors, headers_for):
        response = client.get("/api/author", params={"filters": "[{"}, headers=headers_for([("Books", "Read")]))
        assert response.status_code == 403

    def test_books_by_price_and_stock(self, client, db_session, headers):
        author = create_author(db_session, name="Orwell")
        create_book(db_session, title="1984", author=author, price=Decimal("9.99"), in_stock=True)
        create_book(db_session, title="Animal Farm", author=author, price=Decimal("7.50"), in_stock=False)
        create_book(db_session, title="Brave New World", price=Decimal("12.00"), in_stock=True)
        db_session.commit()

        response = client.get(
            "/api/books",
            params=filters(("Price", "LessThan", "10"), ("InStock", "Equal", "true")),
            headers=headers,
        )
        assert [b["Title"] for b in response.json()] == ["1984"]

        response = client.get("/api/books", params=filters(("AuthorId", "Equal", str(author.id))), headers=headers)
        assert sorted(b["Title"] for b in response.json()) == ["1984", "Animal Farm"]


class TestSecurityResources:

    @pytest.fixture
    def headers(self, headers_for):
        grants = [(resource, action)
                  for resource in ("Role", "RoleEntitlement", "User", "UserInRole")
                  for action in ("Create", "Read", "Update", "Delete")]
        return headers_for(grants, role_name="Security Admin")

    def test_granting_through_the_api(self, client, db_session, headers):
        user = create_user(db_session)
        role = create_role(db_session, name="Catalogue")
        db_session.commit()
        user_headers = auth_headers(user)
        assert client.get("/api/books", headers=user_headers).status_code == 403

        response = client.post(
            "/api/roleentitlement",
            json={"RoleId": str(role.id), "Resource": "Books", "Entitlement": "Read"},
            headers=headers,
        )
        assert response.status_code == 200
        response = client.post("/api/userinrole", json={"UserId": str(user.id), "RoleId": str(role.id)}, headers=headers)
        assert response.status_code == 200

        assert client.get("/api/books", headers=user_headers).status_code == 200

    def test_unknown_entitlement_rejected(self, client, db_session, headers):
        role = create_role(db_session)
        db_session.commit()
        response = client.post(
            "/api/roleentitlement",
            json={"RoleId": str(role.id), "Resource": "Books", "Entitlement": "Approve"},
            headers=headers,
        )
        assert response.status_code == 422

    def test_filter_entitlements_by_enum(self, client, db_session, headers):
        create_role(db_session, grants=[("Books", "Read"), ("Books", "Delete")])
        db_session.commit()
        response = client.get(
            "/api/roleentitlement",
            params=filters(("Resource", "Equal", "Books"), ("Entitlement", "Equal", "Delete")),
            headers=headers,
        )
        assert response.status_code == 200
        assert [e["Entitlement"] for e in response.json()] == ["Delete"]

    def test_deleting_role_removes_its_grants(self, client, db_session, headers):
        role = create_role(db_session, grants=[("Books", "Read")])
        create_user(db_session, roles=[role])
        db_session.commit()

        response = client.delete(f"/api/role/{role.id}", headers=headers)
        assert response.status_code == 200
        assert response.json() == 3

        db_session.expire_all()
        assert db_session.get(Role, role.id) is None
        assert db_session.query(RoleEntitlement).filter(RoleEntitlement.role_id == role.id).count() == 0
        assert db_session.query(UserInRole).filter(UserInRole.role_id == role.id).count() == 0

    def test_user_listing(self, client, db_session, headers):
        create_user(db_session, user_name="alice", is_active=True)
        create_user(db_session, user_name="bob", is_active=False)
        db_session.commit()
        response = client.get("/api/user", params=filters(("IsActive", "Equal", "false")), headers=headers)
        assert [u["UserName"] for u in response.json()] == ["bob"]
