"""
Tests for the contact message inbox

Covers the state machine (read/unread, trash, restore, permanent delete),
statistics, filters and input validation.
"""
from conftest import error_code

MESSAGE_FIELDS = "id fullName email city subject messageDescription isRead readAt isDeleted deletedAt"

CREATE_MESSAGE = f"""
mutation Create($input: CreateMessageInput!) {{
  createMessage(input: $input) {{ {MESSAGE_FIELDS} }}
}}
"""

MESSAGES = f"""
query Messages($filters: MessageFiltersInput) {{
  messages(filters: $filters) {{ {MESSAGE_FIELDS} }}
}}
"""

DELETED_MESSAGES = "query { deletedMessages { id isRead deletedAt } }"
STATS = "query { messageStats { total unread read deleted } }"
MARK_READ = f"mutation($id: ID!) {{ markMessageAsRead(id: $id) {{ {MESSAGE_FIELDS} }} }}"
MARK_UNREAD = f"mutation($id: ID!) {{ markMessageAsUnread(id: $id) {{ {MESSAGE_FIELDS} }} }}"
SOFT_DELETE = "mutation($id: ID!) { softDeleteMessage(id: $id) }"
RESTORE = f"mutation($id: ID!) {{ restoreMessage(id: $id) {{ {MESSAGE_FIELDS} }} }}"
PERMANENT_DELETE = "mutation($id: ID!) { permanentDeleteMessage(id: $id) }"


def message_input(**overrides):
    data = {
        "fullName": "Ola Nordmann",
        "email": "ola@example.com",
        "city": "Oslo",
        "subject": "Project inquiry",
        "messageDescription": "I would like to talk about a project.",
    }
    data.update(overrides)
    return data


def create_message(gql, **overrides):
    body = gql(CREATE_MESSAGE, {"input": message_input(**overrides)})
    assert "errors" not in body, body
    return body["data"]["createMessage"]


def active_ids(gql, headers, filters=None):
    body = gql(MESSAGES, {"filters": filters}, headers)
    assert "errors" not in body, body
    return [m["id"] for m in body["data"]["messages"]]


def deleted_ids(gql, headers):
    body = gql(DELETED_MESSAGES, headers=headers)
    assert "errors" not in body, body
    return [m["id"] for m in body["data"]["deletedMessages"]]


def test_create_message_starts_unread_and_active(gql):
    message = create_message(gql, email="  Ola@Example.COM ", fullName="  Ola Nordmann  ")

    assert message["isRead"] is False
    assert message["readAt"] is None
    assert message["isDeleted"] is False
    assert message["deletedAt"] is None
    assert message["email"] == "ola@example.com"
    assert message["fullName"] == "Ola Nordmann"


def test_create_message_is_public_but_inbox_is_not(gql):
    create_message(gql)

    body = gql(MESSAGES)
    assert error_code(body) == "UNAUTHENTICATED"


def test_create_message_validation(gql):
    body = gql(CREATE_MESSAGE, {"input": message_input(subject="Hey")})
    assert error_code(body) == "BAD_REQUEST"
    assert "subject" in body["errors"][0]["message"]

    body = gql(CREATE_MESSAGE, {"input": message_input(email="not-an-email")})
    assert error_code(body) == "BAD_REQUEST"

    body = gql(CREATE_MESSAGE, {"input": message_input(messageDescription="short")})
    assert error_code(body) == "BAD_REQUEST"

    body = gql(CREATE_MESSAGE, {"input": message_input(fullName="A")})
    assert error_code(body) == "BAD_REQUEST"


def test_create_message_rejects_malformed_email(gql):
    for email in ("ola@.example..com", "ola@example", "ola example@example.com"):
        body = gql(CREATE_MESSAGE, {"input": message_input(email=email)})
        assert error_code(body) == "BAD_REQUEST", email
        assert "email" in body["errors"][0]["message"]


def test_mark_read_then_unread_round_trip(gql, editor_headers):
    message = create_message(gql)

    body = gql(MARK_READ, {"id": message["id"]}, editor_headers)
    read = body["data"]["markMessageAsRead"]
    assert read["isRead"] is True
    assert read["readAt"] is not None

    body = gql(MARK_UNREAD, {"id": message["id"]}, editor_headers)
    unread = body["data"]["markMessageAsUnread"]
    assert unread["isRead"] is False
    assert unread["readAt"] is None


def test_soft_delete_moves_message_to_trash(gql, editor_headers):
    message = create_message(gql)

    body = gql(SOFT_DELETE, {"id": message["id"]}, editor_headers)
    assert body["data"]["softDeleteMessage"] is True

    assert message["id"] not in active_ids(gql, editor_headers)
    assert message["id"] in deleted_ids(gql, editor_headers)


def test_restore_reverses_soft_delete(gql, editor_headers):
    message = create_message(gql)
    gql(MARK_READ, {"id": message["id"]}, editor_headers)
    gql(SOFT_DELETE, {"id": message["id"]}, editor_headers)

    body = gql(RESTORE, {"id": message["id"]}, editor_headers)
    restored = body["data"]["restoreMessage"]

    assert restored["isDeleted"] is False
    assert restored["deletedAt"] is None
    # Read state survives the trip through the trash
    assert restored["isRead"] is True
    assert message["id"] in active_ids(gql, editor_headers)
    assert message["id"] not in deleted_ids(gql, editor_headers)


def test_restore_active_message_is_noop(gql, editor_headers):
    message = create_message(gql)

    body = gql(RESTORE, {"id": message["id"]}, editor_headers)

    assert body["data"]["restoreMessage"]["isDeleted"] is False
    assert active_ids(gql, editor_headers) == [message["id"]]


def test_permanent_delete_removes_from_both_views(gql, editor_headers, admin_headers):
    message = create_message(gql)
    gql(SOFT_DELETE, {"id": message["id"]}, editor_headers)

    body = gql(PERMANENT_DELETE, {"id": message["id"]}, admin_headers)
    assert body["data"]["permanentDeleteMessage"] is True

    assert message["id"] not in active_ids(gql, admin_headers)
    assert message["id"] not in deleted_ids(gql, admin_headers)

    body = gql(RESTORE, {"id": message["id"]}, admin_headers)
    assert error_code(body) == "NOT_FOUND"


def test_permanent_delete_requires_admin(gql, editor_headers):
    message = create_message(gql)

    body = gql(PERMANENT_DELETE, {"id": message["id"]}, editor_headers)

    assert error_code(body) == "FORBIDDEN"
    assert message["id"] in active_ids(gql, editor_headers)


def test_trashed_message_is_not_found_for_active_operations(gql, editor_headers):
    message = create_message(gql)
    gql(SOFT_DELETE, {"id": message["id"]}, editor_headers)

    for operation in (MARK_READ, MARK_UNREAD, SOFT_DELETE):
        body = gql(operation, {"id": message["id"]}, editor_headers)
        assert error_code(body) == "NOT_FOUND"

    body = gql(f'query {{ message(id: "{message["id"]}") {{ id }} }}', headers=editor_headers)
    assert error_code(body) == "NOT_FOUND"


def test_unknown_id_is_not_found(gql, admin_headers):
    for operation in (MARK_READ, SOFT_DELETE, RESTORE, PERMANENT_DELETE):
        body = gql(operation, {"id": "does-not-exist"}, admin_headers)
        assert error_code(body) == "NOT_FOUND"


def test_message_stats(gql, editor_headers):
    first = create_message(gql)
    second = create_message(gql)
    third = create_message(gql)
    create_message(gql)

    gql(MARK_READ, {"id": first["id"]}, editor_headers)
    gql(MARK_READ, {"id": second["id"]}, editor_headers)
    gql(SOFT_DELETE, {"id": second["id"]}, editor_headers)
    gql(SOFT_DELETE, {"id": third["id"]}, editor_headers)

    body = gql(STATS, headers=editor_headers)

    assert body["data"]["messageStats"] == {"total": 2, "unread": 1, "read": 1, "deleted": 2}


def test_messages_newest_first(gql, editor_headers):
    first = create_message(gql)
    second = create_message(gql)

    assert active_ids(gql, editor_headers) == [second["id"], first["id"]]


def test_deleted_messages_most_recently_deleted_first(gql, editor_headers):
    first = create_message(gql)
    second = create_message(gql)
    gql(SOFT_DELETE, {"id": second["id"]}, editor_headers)
    gql(SOFT_DELETE, {"id": first["id"]}, editor_headers)

    assert deleted_ids(gql, editor_headers) == [first["id"], second["id"]]


def test_message_filters(gql, editor_headers):
    oslo = create_message(gql, city="Oslo", email="kari@example.com", subject="Freelance work")
    bergen = create_message(
        gql,
        city="Bergen",
        email="per@example.com",
        subject="Hello there",
        messageDescription="Looking for a React developer.",
    )
    gql(MARK_READ, {"id": bergen["id"]}, editor_headers)

    assert active_ids(gql, editor_headers, {"isRead": True}) == [bergen["id"]]
    assert active_ids(gql, editor_headers, {"isRead": False}) == [oslo["id"]]
    assert active_ids(gql, editor_headers, {"email": "KARI@example.com"}) == [oslo["id"]]
    assert active_ids(gql, editor_headers, {"city": "berg"}) == [bergen["id"]]
    assert active_ids(gql, editor_headers, {"searchTerm": "freelance"}) == [oslo["id"]]
    assert active_ids(gql, editor_headers, {"searchTerm": "react"}) == [bergen["id"]]
    assert active_ids(gql, editor_headers, {"city": "oslo", "isRead": True}) == []


def test_message_filters_match_wildcards_literally(gql, editor_headers):
    discount = create_message(gql, subject="Offer: 50% off hosting")
    create_message(gql, subject="Project inquiry")

    assert active_ids(gql, editor_headers, {"searchTerm": "%"}) == [discount["id"]]
    assert active_ids(gql, editor_headers, {"searchTerm": "50%"}) == [discount["id"]]
    assert active_ids(gql, editor_headers, {"searchTerm": "_"}) == []
    assert active_ids(gql, editor_headers, {"city": "O_lo"}) == []
