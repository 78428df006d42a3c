from src.models.recommendation import RecommendationStatus, RecommendationType
from src.services import friends as friends_service
from src.services import recommendations as rec_service


def _befriend(db, a, b):
    friends_service.send_request(db, a.id, b.id)
    edge_id = [p for p in friends_service.list_pending(db, b.id) if p.user_id == a.id][0].id
    friends_service.respond_to_request(db, b.id, edge_id, True)


def test_parse_enum_is_case_insensitive():
    assert rec_service.parse_enum(RecommendationType, "tvshow") is RecommendationType.TvShow
    assert rec_service.parse_enum(RecommendationStatus, " WATCHED ") is RecommendationStatus.Watched
    assert rec_service.parse_enum(RecommendationType, "opera") is None
    assert rec_service.parse_enum(RecommendationType, None) is None


def test_types_lists_all_names():
    assert rec_service.types() == ["Movie", "Book", "Game", "TvShow", "Podcast", "Music", "Other"]


def test_create_without_recipients_fans_out_to_each_friend_once(db, make_user):
    me, b, c = make_user("alice"), make_user("bob"), make_user("carol")
    make_user("dave")
    _befriend(db, me, b)
    _befriend(db, c, me)

    created = rec_service.create(db, me.id, title="Dune", type="book")

    assert sorted(r.recommended_to_user_id for r in created) == sorted([b.id, c.id])
    assert all(r.type == "Book" and r.status == "Unseen" for r in created)
    assert all(r.created_by_username == "alice" for r in created)
    assert all(r.completed_at is None for r in created)


def test_create_without_friends_falls_back_to_self(db, make_user):
    me = make_user("alice")

    created = rec_service.create(db, me.id, title="Dune", type="Movie", description="Villeneuve")

    assert [(r.recommended_to_user_id, r.recommended_to_username) for r in created] == [(me.id, "alice")]
    assert created[0].description == "Villeneuve"


def test_create_with_explicit_recipients(db, make_user):
    me, b, c = make_user("alice"), make_user("bob"), make_user("carol")
    _befriend(db, me, b)

    created = rec_service.create(db, me.id, title="Hades", type="Game", recipient_ids=[c.id, c.id], external_id="steam:1145360")

    assert [r.recommended_to_user_id for r in created] == [c.id]
    assert created[0].external_id == "steam:1145360"


def test_create_rejects_unknown_type_or_recipient(db, make_user):
    me = make_user("alice")

    assert rec_service.create(db, me.id, title="X", type="Opera") is None
    assert rec_service.create(db, me.id, title="X", type="Movie", recipient_ids=[me.id + 100]) is None
    assert rec_service.list_visible(db, me.id) == []


def test_visibility_is_limited_to_creator_and_recipient(db, make_user):
    me, b, outsider = make_user("alice"), make_user("bob"), make_user("eve")
    rec = rec_service.create(db, me.id, title="Dune", type="Book", recipient_ids=[b.id])[0]

    assert rec_service.get(db, rec.id, me.id) is not None
    assert rec_service.get(db, rec.id, b.id) is not None
    assert rec_service.get(db, rec.id, outsider.id) is None
    assert rec_service.list_visible(db, outsider.id) == []
    assert rec_service.delete(db, rec.id, outsider.id) is False


def test_list_visible_filters(db, make_user):
    me, b = make_user("alice"), make_user("bob")
    rec_service.create(db, me.id, title="Dune", type="Book", recipient_ids=[b.id])
    rec_service.create(db, b.id, title="Alien", type="Movie", recipient_ids=[me.id])

    assert [r.title for r in rec_service.list_visible(db, me.id)] == ["Alien", "Dune"]
    assert [r.title for r in rec_service.list_visible(db, me.id, type="movie")] == ["Alien"]
    assert [r.title for r in rec_service.list_visible(db, me.id, friend_id=b.id)] == ["Alien"]
    # неизвестный тип не фильтрует
    assert len(rec_service.list_visible(db, me.id, type="opera")) == 2


def test_status_transitions_stamp_completed_at_only_for_watched(db, make_user):
    me, b = make_user("alice"), make_user("bob")
    rec = rec_service.create(db, me.id, title="Dune", type="Book", recipient_ids=[b.id])[0]

    assert rec_service.update_status(db, rec.id, b.id, "InProgress") is True
    assert rec_service.get(db, rec.id, b.id).completed_at is None

    assert rec_service.update_status(db, rec.id, b.id, "watched") is True
    watched = rec_service.get(db, rec.id, b.id)
    assert watched.status == "Watched"
    assert watched.completed_at is not None

    assert rec_service.update_status(db, rec.id, b.id, "Unseen") is True
    assert rec_service.get(db, rec.id, b.id).completed_at is None


def test_only_recipient_updates_status(db, make_user):
    me, b = make_user("alice"), make_user("bob")
    rec = rec_service.create(db, me.id, title="Dune", type="Book", recipient_ids=[b.id])[0]

    assert rec_service.update_status(db, rec.id, me.id, "Watched") is False
    assert rec_service.update_status(db, rec.id, b.id, "Finished") is False
    assert rec_service.get(db, rec.id, b.id).status == "Unseen"


def test_delete_by_creator_or_recipient(db, make_user):
    me, b = make_user("alice"), make_user("bob")
    first, second = (
        rec_service.create(db, me.id, title=t, type="Book", recipient_ids=[b.id])[0] for t in ("A", "B")
    )

    assert rec_service.delete(db, first.id, me.id) is True
    assert rec_service.delete(db, second.id, b.id) is True
    assert rec_service.list_visible(db, me.id) == []
