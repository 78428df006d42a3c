from src.services import friends as friends_service


def _befriend(db, a, b):
    friends_service.send_request(db, a.id, b.id)
    pending = [p for p in friends_service.list_pending(db, b.id) if p.user_id == a.id]
    friends_service.respond_to_request(db, b.id, pending[0].id, True)


def test_list_friends_is_symmetric_and_only_accepted(db, make_user):
    a, b, c = make_user("alice"), make_user("bob"), make_user("carol")
    _befriend(db, a, b)
    friends_service.send_request(db, a.id, c.id)

    friends_a = friends_service.list_friends(db, a.id)
    friends_b = friends_service.list_friends(db, b.id)

    assert [(f.user_id, f.username, f.email, f.status) for f in friends_a] == [
        (b.id, "bob", "bob@example.com", "Accepted"),
    ]
    assert [f.user_id for f in friends_b] == [a.id]
    assert friends_a[0].accepted_at == friends_b[0].accepted_at


def test_list_friends_most_recent_first(db, make_user):
    a, b, c = make_user("alice"), make_user("bob"), make_user("carol")
    _befriend(db, a, b)
    _befriend(db, c, a)

    assert [f.username for f in friends_service.list_friends(db, a.id)] == ["carol", "bob"]


def test_pending_and_sent_projections(db, make_user):
    a, b, c = make_user("alice"), make_user("bob"), make_user("carol")
    friends_service.send_request(db, a.id, b.id)
    friends_service.send_request(db, c.id, a.id)

    sent = friends_service.list_sent(db, a.id)
    pending = friends_service.list_pending(db, a.id)

    assert [(s.user_id, s.status) for s in sent] == [(b.id, "Pending")]
    assert [(p.user_id, p.status) for p in pending] == [(c.id, "Pending")]
    assert pending[0].accepted_at is None
    assert friends_service.list_pending(db, b.id)[0].user_id == a.id


def test_friend_ids_lists_each_friend_once(db, make_user):
    a, b, c = make_user("alice"), make_user("bob"), make_user("carol")
    _befriend(db, a, b)
    _befriend(db, c, a)

    assert sorted(friends_service.friend_ids(db, a.id)) == sorted([b.id, c.id])
    assert friends_service.friend_ids(db, b.id) == [a.id]


def test_search_matches_substring_and_excludes_searcher(db, make_user):
    me = make_user("alice")
    make_user("john")
    make_user("jane")
    make_user("bob")

    result = friends_service.search_identities(db, me.id, "jo")

    assert [u.username for u in result] == ["john"]


def test_search_is_case_insensitive_and_covers_email(db, make_user):
    me = make_user("alice")
    make_user("zed", email="JOHNNY@mail.test")

    assert [u.username for u in friends_service.search_identities(db, me.id, "johnny")] == ["zed"]
    assert [u.username for u in friends_service.search_identities(db, me.id, "ZED")] == ["zed"]
    assert friends_service.search_identities(db, me.id, "alice") == []


def test_search_blank_term_returns_nothing(db, make_user):
    me = make_user("alice")
    make_user("bob")

    assert friends_service.search_identities(db, me.id, "") == []
    assert friends_service.search_identities(db, me.id, "   ") == []
    assert friends_service.search_identities(db, me.id, None) == []


def test_search_treats_wildcards_literally(db, make_user):
    me = make_user("alice")
    make_user("bob")
    make_user("under_score")

    assert friends_service.search_identities(db, me.id, "%") == []
    assert [u.username for u in friends_service.search_identities(db, me.id, "_")] == ["under_score"]


def test_search_is_bounded(db, make_user):
    me = make_user("alice")
    for i in range(friends_service.SEARCH_LIMIT + 5):
        make_user(f"user{i:02d}")

    assert len(friends_service.search_identities(db, me.id, "user")) == friends_service.SEARCH_LIMIT


def test_search_relationship_labels(db, make_user):
    me = make_user("me")
    friend, sent_to, received_from, stranger = (
        make_user("pal"), make_user("pat"), make_user("pam"), make_user("pax"),
    )
    _befriend(db, me, friend)
    friends_service.send_request(db, me.id, sent_to.id)
    friends_service.send_request(db, received_from.id, me.id)

    labels = {u.username: u.friendship_status for u in friends_service.search_identities(db, me.id, "pa")}

    assert labels == {
        "pal": "Friends",
        "pat": "RequestSent",
        "pam": "RequestReceived",
        "pax": "None",
    }
    assert stranger.id not in {friend.id, sent_to.id, received_from.id}
