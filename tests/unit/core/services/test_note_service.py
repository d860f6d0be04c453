import uuid
from datetime import datetime

import pytest
from sqlalchemy.exc import DataError, IntegrityError

import notekeeper.core.services.note_service as ns
from notekeeper.core.exceptions import Conflict, InvalidArgument, NotFound
from notekeeper.core.schemas.notes import NoteCreate, NoteDelete, NoteUpdate
from notekeeper.core.services.note_service import NoteService


class Dummy:
    def __init__(self, **kw):
        self.__dict__.update(kw)


def make_note(**kw):
    now = datetime.utcnow()
    data = dict(
        id=uuid.uuid4(),
        user_id=uuid.uuid4(),
        title="Groceries",
        text="milk",
        completed=False,
        created_at=now,
        updated_at=now,
    )
    data.update(kw)
    return Dummy(**data)


class FakeNoteRepo:
    def __init__(self, notes=None):
        self.notes = {n.id: n for n in (notes or [])}
        self.calls = []
        self.created = None
        self.saved = None
        self.deleted = None
        self.create_error = None
        self.save_error = None

    async def list_notes(self):
        self.calls.append("list_notes")
        return list(self.notes.values())

    async def get_by_id(self, note_id):
        self.calls.append("get_by_id")
        return self.notes.get(note_id)

    async def get_by_title(self, title):
        self.calls.append("get_by_title")
        return next((n for n in self.notes.values() if n.title == title), None)

    async def create_note(self, data):
        self.calls.append("create_note")
        if self.create_error:
            raise self.create_error
        self.created = data
        note = make_note(**data)
        self.notes[note.id] = note
        return note

    async def save_note(self, note):
        self.calls.append("save_note")
        if self.save_error:
            raise self.save_error
        self.saved = note
        return note

    async def delete_note(self, note):
        self.calls.append("delete_note")
        self.deleted = note
        self.notes.pop(note.id, None)


class FakeUserRepo:
    def __init__(self, users=None):
        self.users = {u.id: u for u in (users or [])}
        self.calls = []

    async def get_by_id(self, user_id):
        self.calls.append("get_by_id")
        return self.users.get(user_id)

    async def get_by_ids(self, user_ids):
        self.calls.append("get_by_ids")
        return {uid: self.users[uid] for uid in set(user_ids) if uid in self.users}


@pytest.fixture
def owner():
    return Dummy(id=uuid.uuid4(), username="u1")


def build_service(monkeypatch, notes=None, users=None):
    note_repo = FakeNoteRepo(notes)
    user_repo = FakeUserRepo(users)
    monkeypatch.setattr(ns, "NoteRepository", lambda s: note_repo, raising=True)
    monkeypatch.setattr(ns, "UserRepository", lambda s: user_repo, raising=True)
    return NoteService(session=object()), note_repo, user_repo


async def test_list_notes_joins_usernames_in_one_batch(monkeypatch, owner):
    other = Dummy(id=uuid.uuid4(), username="u2")
    notes = [
        make_note(user_id=owner.id, title="a"),
        make_note(user_id=other.id, title="b"),
        make_note(user_id=owner.id, title="c"),
    ]
    svc, _, user_repo = build_service(monkeypatch, notes, [owner, other])

    result = await svc.list_notes()

    assert [r.username for r in result] == ["u1", "u2", "u1"]
    assert user_repo.calls == ["get_by_ids"]


async def test_list_notes_missing_owner_gives_null_username(monkeypatch, owner):
    notes = [make_note(user_id=owner.id, title="a"), make_note(title="orphan")]
    svc, _, _ = build_service(monkeypatch, notes, [owner])

    result = await svc.list_notes()

    by_title = {r.title: r for r in result}
    assert by_title["a"].username == "u1"
    assert by_title["orphan"].username is None


async def test_list_notes_empty_is_not_found(monkeypatch):
    svc, _, _ = build_service(monkeypatch)
    with pytest.raises(NotFound) as exc:
        await svc.list_notes()
    assert exc.value.message == "No notes found"
    assert exc.value.status_code == 400


async def test_get_note_with_username(monkeypatch, owner):
    note = make_note(user_id=owner.id)
    svc, _, _ = build_service(monkeypatch, [note], [owner])

    got = await svc.get_note(str(note.id))

    assert got.id == note.id
    assert got.user == owner.id
    assert got.username == "u1"
    assert got.completed is False


@pytest.mark.parametrize("bad_id", ["", "123", "not-a-uuid", "507f1f77bcf86cd799439011"])
async def test_get_note_malformed_id_skips_store(monkeypatch, bad_id):
    svc, note_repo, user_repo = build_service(monkeypatch)
    with pytest.raises(InvalidArgument):
        await svc.get_note(bad_id)
    assert note_repo.calls == [] and user_repo.calls == []


async def test_get_note_not_found(monkeypatch):
    svc, _, _ = build_service(monkeypatch)
    with pytest.raises(NotFound) as exc:
        await svc.get_note(str(uuid.uuid4()))
    assert exc.value.message == "Note not found"


async def test_get_note_owner_missing(monkeypatch):
    note = make_note()
    svc, _, _ = build_service(monkeypatch, [note], [])
    with pytest.raises(NotFound) as exc:
        await svc.get_note(str(note.id))
    assert exc.value.message == "User referenced by note not found"


async def test_create_note_sets_completed_false(monkeypatch, owner):
    svc, note_repo, _ = build_service(monkeypatch, users=[owner])

    resp = await svc.create_note(NoteCreate(user=str(owner.id), title="Groceries", text="milk"))

    assert resp.message == "New note created"
    assert note_repo.created == {
        "user_id": owner.id,
        "title": "Groceries",
        "text": "milk",
        "completed": False,
    }


@pytest.mark.parametrize(
    "payload",
    [
        {"title": "t", "text": "x"},
        {"user": str(uuid.uuid4()), "text": "x"},
        {"user": str(uuid.uuid4()), "title": "t"},
        {"user": str(uuid.uuid4()), "title": "", "text": "x"},
    ],
)
async def test_create_note_requires_all_fields(monkeypatch, payload):
    svc, note_repo, _ = build_service(monkeypatch)
    with pytest.raises(InvalidArgument) as exc:
        await svc.create_note(NoteCreate(**payload))
    assert exc.value.message == "All fields are required"
    assert note_repo.calls == []


async def test_create_note_malformed_user_is_invalid_data(monkeypatch):
    svc, _, _ = build_service(monkeypatch)
    with pytest.raises(InvalidArgument) as exc:
        await svc.create_note(NoteCreate(user="nobody", title="t", text="x"))
    assert exc.value.message == "Invalid note data received"


async def test_create_note_duplicate_title(monkeypatch):
    existing = make_note(title="Groceries")
    svc, note_repo, _ = build_service(monkeypatch, [existing])

    with pytest.raises(Conflict) as exc:
        await svc.create_note(NoteCreate(user=str(uuid.uuid4()), title="Groceries", text="eggs"))

    assert exc.value.message == "Duplicate note title"
    assert "create_note" not in note_repo.calls


async def test_create_note_title_match_is_case_sensitive(monkeypatch):
    svc, note_repo, _ = build_service(monkeypatch, [make_note(title="Groceries")])
    await svc.create_note(NoteCreate(user=str(uuid.uuid4()), title="groceries", text="eggs"))
    assert note_repo.created["title"] == "groceries"


async def test_create_note_constraint_violation_is_conflict(monkeypatch):
    svc, note_repo, _ = build_service(monkeypatch)
    note_repo.create_error = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))
    with pytest.raises(Conflict):
        await svc.create_note(NoteCreate(user=str(uuid.uuid4()), title="t", text="x"))


async def test_create_note_store_rejection_is_invalid_data(monkeypatch):
    svc, note_repo, _ = build_service(monkeypatch)
    note_repo.create_error = DataError("INSERT", {}, Exception("value too long"))
    with pytest.raises(InvalidArgument) as exc:
        await svc.create_note(NoteCreate(user=str(uuid.uuid4()), title="t", text="x"))
    assert exc.value.message == "Invalid note data received"


async def test_update_note_replaces_all_fields(monkeypatch):
    note = make_note()
    new_owner = uuid.uuid4()
    svc, note_repo, _ = build_service(monkeypatch, [note])

    msg = await svc.update_note(
        NoteUpdate(id=str(note.id), user=str(new_owner), title="Groceries", text="milk, eggs", completed=True)
    )

    assert msg == "'Groceries' updated"
    assert note_repo.saved is note
    assert note.user_id == new_owner
    assert note.text == "milk, eggs"
    assert note.completed is True


async def test_update_note_rename_to_free_title(monkeypatch):
    note = make_note(title="Old")
    svc, _, _ = build_service(monkeypatch, [note])
    msg = await svc.update_note(
        NoteUpdate(id=str(note.id), user=str(note.user_id), title="New", text="x", completed=False)
    )
    assert msg == "'New' updated"
    assert note.title == "New"


async def test_update_note_duplicate_of_other_note(monkeypatch):
    note = make_note(title="Mine")
    other = make_note(title="Taken")
    svc, note_repo, _ = build_service(monkeypatch, [note, other])

    with pytest.raises(Conflict):
        await svc.update_note(
            NoteUpdate(id=str(note.id), user=str(note.user_id), title="Taken", text="x", completed=False)
        )
    assert note_repo.saved is None
    assert note.title == "Mine"


@pytest.mark.parametrize(
    "missing",
    ["id", "user", "title", "text", "completed"],
)
async def test_update_note_requires_all_fields(monkeypatch, missing):
    payload = {
        "id": str(uuid.uuid4()),
        "user": str(uuid.uuid4()),
        "title": "t",
        "text": "x",
        "completed": False,
    }
    payload.pop(missing)
    svc, note_repo, _ = build_service(monkeypatch)
    with pytest.raises(InvalidArgument) as exc:
        await svc.update_note(NoteUpdate(**payload))
    assert exc.value.message == "All fields are required"
    assert note_repo.calls == []


async def test_update_note_missing_note(monkeypatch):
    svc, _, _ = build_service(monkeypatch)
    with pytest.raises(NotFound):
        await svc.update_note(
            NoteUpdate(id=str(uuid.uuid4()), user=str(uuid.uuid4()), title="t", text="x", completed=True)
        )


async def test_update_note_malformed_id(monkeypatch):
    svc, note_repo, _ = build_service(monkeypatch)
    with pytest.raises(InvalidArgument) as exc:
        await svc.update_note(
            NoteUpdate(id="abc", user=str(uuid.uuid4()), title="t", text="x", completed=True)
        )
    assert exc.value.message == "Note ID is not valid"
    assert note_repo.calls == []


async def test_update_note_malformed_user(monkeypatch):
    note = make_note()
    svc, note_repo, _ = build_service(monkeypatch, [note])
    with pytest.raises(InvalidArgument) as exc:
        await svc.update_note(
            NoteUpdate(id=str(note.id), user="nobody", title="t", text="x", completed=True)
        )
    assert exc.value.message == "Invalid note data received"
    assert note_repo.calls == []


@pytest.mark.parametrize("completed", ["yes", 1, 0, "true"])
async def test_update_note_completed_must_be_boolean(monkeypatch, completed):
    note = make_note()
    svc, note_repo, _ = build_service(monkeypatch, [note])
    with pytest.raises(InvalidArgument) as exc:
        await svc.update_note(
            NoteUpdate(id=str(note.id), user=str(note.user_id), title="t", text="x", completed=completed)
        )
    assert exc.value.message == "All fields are required"
    assert note_repo.saved is None


async def test_update_note_store_rejection_is_invalid_data(monkeypatch):
    note = make_note()
    svc, note_repo, _ = build_service(monkeypatch, [note])
    note_repo.save_error = DataError("UPDATE", {}, Exception("value too long"))
    with pytest.raises(InvalidArgument) as exc:
        await svc.update_note(
            NoteUpdate(id=str(note.id), user=str(note.user_id), title="t", text="x", completed=True)
        )
    assert exc.value.message == "Invalid note data received"


async def test_update_note_constraint_violation_is_conflict(monkeypatch):
    note = make_note()
    svc, note_repo, _ = build_service(monkeypatch, [note])
    note_repo.save_error = IntegrityError("UPDATE", {}, Exception("UNIQUE constraint failed"))
    with pytest.raises(Conflict):
        await svc.update_note(
            NoteUpdate(id=str(note.id), user=str(note.user_id), title="Raced", text="x", completed=True)
        )


async def test_delete_note(monkeypatch):
    note = make_note(title="Groceries")
    svc, note_repo, _ = build_service(monkeypatch, [note])

    msg = await svc.delete_note(NoteDelete(id=str(note.id)))

    assert msg == f"Note 'Groceries' with ID {note.id} deleted"
    assert note_repo.deleted is note
    with pytest.raises(NotFound):
        await svc.get_note(str(note.id))


async def test_delete_note_requires_id(monkeypatch):
    svc, _, _ = build_service(monkeypatch)
    with pytest.raises(InvalidArgument) as exc:
        await svc.delete_note(NoteDelete())
    assert exc.value.message == "Note ID required"


async def test_delete_note_missing(monkeypatch):
    svc, note_repo, _ = build_service(monkeypatch)
    with pytest.raises(NotFound):
        await svc.delete_note(NoteDelete(id=str(uuid.uuid4())))
    assert "delete_note" not in note_repo.calls


async def test_delete_note_malformed_id(monkeypatch):
    svc, note_repo, _ = build_service(monkeypatch)
    with pytest.raises(InvalidArgument) as exc:
        await svc.delete_note(NoteDelete(id="not-a-uuid"))
    assert exc.value.message == "Note ID is not valid"
    assert note_repo.calls == []
