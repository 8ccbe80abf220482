"""
Tests for ADMIN user management and the seed script
"""
from apps.portfolio.schema import schema
from apps.portfolio.seed import seed_admin
from apps.shared.auth import verify_password
from apps.shared.errors import BadRequestError
from apps.users.models import User, UserRole
from apps.users.service import delete_user
from conftest import auth_headers, error_code, make_user

USER_FIELDS = "id name email role"

CREATE_USER = f"mutation($input: CreateUserInput!) {{ createUser(input: $input) {{ {USER_FIELDS} }} }}"
UPDATE_USER = f"mutation($id: ID!, $input: UpdateUserInput!) {{ updateUser(id: $id, input: $input) {{ {USER_FIELDS} }} }}"
DELETE_USER = "mutation($id: ID!) { deleteUser(id: $id) }"


def test_create_user_defaults_to_editor(gql, db, admin_headers):
    body = gql(
        CREATE_USER,
        {"input": {"name": "New Editor", "email": "New@Example.com", "password": "secret-pass"}},
        admin_headers,
    )

    created = body["data"]["createUser"]
    assert created["role"] == "EDITOR"
    assert created["email"] == "new@example.com"

    stored = db.query(User).filter(User.id == created["id"]).one()
    assert stored.password != "secret-pass"
    assert verify_password("secret-pass", stored.password)


def test_password_is_never_exposed():
    sdl = schema.as_str()
    user_type = sdl.split("type User {")[1].split("}")[0]
    assert "password" not in user_type


def test_create_user_duplicate_email_conflicts(gql, admin_headers, editor_user):
    body = gql(
        CREATE_USER,
        {"input": {"name": "Dup", "email": editor_user.email, "password": "secret-pass"}},
        admin_headers,
    )
    assert error_code(body) == "CONFLICT"


def test_create_user_short_password(gql, admin_headers):
    body = gql(
        CREATE_USER,
        {"input": {"name": "Short", "email": "short@example.com", "password": "1234567"}},
        admin_headers,
    )
    assert error_code(body) == "BAD_REQUEST"


def test_update_user_rehashes_password(gql, db, admin_headers, editor_user):
    body = gql(
        UPDATE_USER,
        {"id": editor_user.id, "input": {"password": "brand-new-pass", "role": "ADMIN"}},
        admin_headers,
    )

    assert body["data"]["updateUser"]["role"] == "ADMIN"
    db.expire_all()
    stored = db.query(User).filter(User.id == editor_user.id).one()
    assert verify_password("brand-new-pass", stored.password)
    assert stored.name == "Editor"


def test_cannot_demote_last_admin(gql, admin_user, admin_headers):
    body = gql(UPDATE_USER, {"id": admin_user.id, "input": {"role": "EDITOR"}}, admin_headers)
    assert error_code(body) == "BAD_REQUEST"


def test_admin_cannot_delete_self(gql, db, admin_user, admin_headers):
    make_user(db, "second-admin@example.com", UserRole.ADMIN)

    body = gql(DELETE_USER, {"id": admin_user.id}, admin_headers)

    assert error_code(body) == "BAD_REQUEST"


def test_cannot_delete_last_admin(gql, db, admin_user):
    other_admin = make_user(db, "other@example.com", UserRole.ADMIN)
    headers = auth_headers(other_admin)

    # Two admins: deleting one is fine
    body = gql(DELETE_USER, {"id": admin_user.id}, headers)
    assert body["data"]["deleteUser"] is True

    # other_admin is now the only admin
    body = gql(UPDATE_USER, {"id": other_admin.id, "input": {"role": "EDITOR"}}, headers)
    assert error_code(body) == "BAD_REQUEST"

    db.expire_all()
    try:
        delete_user(db, other_admin.id)
        assert False, "expected BadRequestError"
    except BadRequestError as e:
        assert e.message == "Cannot delete the last admin"


def test_delete_editor(gql, admin_headers, editor_user):
    body = gql(DELETE_USER, {"id": editor_user.id}, admin_headers)
    assert body["data"]["deleteUser"] is True

    body = gql(f'query {{ user(id: "{editor_user.id}") {{ id }} }}', headers=admin_headers)
    assert error_code(body) == "NOT_FOUND"


def test_list_users(gql, admin_headers, editor_user):
    body = gql("query { users { email role } }", headers=admin_headers)

    emails = {u["email"] for u in body["data"]["users"]}
    assert emails == {"admin@example.com", "editor@example.com"}


def test_seed_admin_is_idempotent(db):
    first = seed_admin(db, "Owner@Example.com", "owner-password", "Owner")
    second = seed_admin(db, "owner@example.com", "other-password")

    assert first.id == second.id
    assert first.role == UserRole.ADMIN
    assert db.query(User).count() == 1
