"""
In-memory Supabase double for service and route tests.

Covers the query-builder chain the services use (select/eq/in_/order/
maybe_single/insert/update/delete/execute), one storage bucket API and the
auth calls. ``fail_on`` sets inject backend failures per table/bucket op;
``silent_on`` sets make deletes affect nothing without an error, as RLS does.
"""

import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from portal.config import settings
from portal.core.policy import Role
from portal.database.supabase_client import get_supabase
from portal.modules.auth.service import clear_session_cache
from portal.storage import get_blob_store
from portal.storage.supabase_storage import SupabaseBlobStore

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeBackendError(Exception):
    pass


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table_name = table
        self.columns = "*"
        self.filters = []
        self.order_by = None
        self.single_mode = None
        self.action = "select"
        self.payload = None

    def select(self, columns="*"):
        self.columns = columns
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def maybe_single(self):
        self.single_mode = "maybe"
        return self

    def single(self):
        self.single_mode = "single"
        return self

    def insert(self, payload):
        self.action = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.action = "update"
        self.payload = payload
        return self

    def delete(self):
        self.action = "delete"
        return self

    def _project(self, row):
        if self.columns.strip() == "*":
            return dict(row)
        keys = [c.strip() for c in self.columns.split(",")]
        return {k: row.get(k) for k in keys}

    def _matching(self):
        return [r for r in self.db.rows(self.table_name) if all(f(r) for f in self.filters)]

    def execute(self):
        if (self.table_name, self.action) in self.db.fail_on:
            raise FakeBackendError(f"{self.action} on {self.table_name} failed")
        rows = self.db.rows(self.table_name)

        if self.action == "insert":
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for item in payload:
                row = dict(item)
                row.setdefault("id", str(uuid.uuid4()))
                row.setdefault("created_at", self.db.next_timestamp())
                rows.append(row)
                inserted.append(dict(row))
            return SimpleNamespace(data=inserted)

        if self.action == "update":
            updated = []
            for row in self._matching():
                row.update(self.payload)
                updated.append(dict(row))
            return SimpleNamespace(data=updated)

        if self.action == "delete" and (self.table_name, "delete") in self.db.silent_on:
            # RLS-filtered or already gone: postgrest answers with no rows, no error
            return SimpleNamespace(data=[])

        if self.action == "delete":
            doomed = self._matching()
            self.db.tables[self.table_name] = [r for r in rows if not any(r is d for d in doomed)]
            return SimpleNamespace(data=[dict(r) for r in doomed])

        result = [self._project(r) for r in self._matching()]
        if self.order_by:
            column, desc = self.order_by
            result.sort(key=lambda r: r.get(column), reverse=desc)
        if self.single_mode == "maybe":
            # postgrest returns no response at all for an empty maybe_single
            return SimpleNamespace(data=result[0]) if result else None
        if self.single_mode == "single":
            if len(result) != 1:
                raise FakeBackendError("JSON object requested, multiple (or no) rows returned")
            return SimpleNamespace(data=result[0])
        return SimpleNamespace(data=result)


class FakeBucket:
    def __init__(self, storage, name):
        self.storage = storage
        self.name = name

    @property
    def objects(self):
        return self.storage.objects.setdefault(self.name, {})

    def _check(self, op):
        if op in self.storage.fail_on:
            raise FakeBackendError(f"storage {op} failed")

    def upload(self, path, file, file_options=None):
        self._check("upload")
        if path in self.objects:
            raise FakeBackendError("The resource already exists")
        self.objects[path] = (bytes(file), (file_options or {}).get("content-type"))
        return SimpleNamespace(path=path)

    def download(self, path):
        self._check("download")
        if path not in self.objects:
            raise FakeBackendError("Object not found")
        return self.objects[path][0]

    def remove(self, paths):
        self._check("remove")
        if "remove" in self.storage.silent_on:
            return []
        removed = []
        for path in paths:
            if self.objects.pop(path, None) is not None:
                removed.append({"name": path})
        return removed

    def list(self, path=None, options=None):
        self._check("list")
        prefix = f"{path}/" if path else ""
        search = (options or {}).get("search", "")
        names = [key[len(prefix):] for key in self.objects if key.startswith(prefix)]
        return [{"name": name} for name in names if "/" not in name and search in name]


class FakeStorage:
    def __init__(self):
        self.objects = {}
        self.fail_on = set()
        self.silent_on = set()

    def from_(self, bucket):
        return FakeBucket(self, bucket)


class FakeAuth:
    def __init__(self):
        self.tokens = {}
        self.passwords = {}
        self.sign_out_calls = 0
        self.get_user_calls = 0
        self.admin = SimpleNamespace(list_users=self._list_users)
        self.users = {}

    def add_user(self, user_id, email, password="secret", token=None, full_name=None):
        user = SimpleNamespace(
            id=user_id,
            email=email,
            user_metadata={"full_name": full_name} if full_name else {},
            app_metadata={},
        )
        self.users[user_id] = user
        self.passwords[email] = (password, user)
        token = token or f"token-{user_id}"
        self.tokens[token] = user
        return token

    def _list_users(self):
        return list(self.users.values())

    def get_user(self, jwt=None):
        self.get_user_calls += 1
        if jwt not in self.tokens:
            raise FakeBackendError("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=self.tokens[jwt])

    def sign_in_with_password(self, credentials):
        password, user = self.passwords.get(credentials["email"], (None, None))
        if user is None or password != credentials["password"]:
            raise FakeBackendError("Invalid login credentials")
        token = next(t for t, u in self.tokens.items() if u is user)
        return SimpleNamespace(user=user, session=SimpleNamespace(access_token=token))

    def sign_out(self):
        self.sign_out_calls += 1


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.fail_on = set()
        self.silent_on = set()
        self.storage = FakeStorage()
        self.auth = FakeAuth()
        self._clock = 0

    def rows(self, table):
        return self.tables.setdefault(table, [])

    def next_timestamp(self):
        self._clock += 1
        return (BASE_TIME + timedelta(seconds=self._clock)).isoformat()

    def table(self, name):
        return FakeQuery(self, name)

    def add_profile(self, user_id, role, email=None, full_name=None):
        email = email or f"{user_id}@example.com"
        self.rows("profiles").append({"id": user_id, "email": email, "full_name": full_name, "role": role})
        return self.auth.add_user(user_id, email, full_name=full_name)

    def add_workspace(self, name="Workspace", workspace_type="dev", created_by="admin-1", description=""):
        row = {
            "id": str(uuid.uuid4()),
            "name": name,
            "description": description,
            "workspace_type": workspace_type,
            "created_by": created_by,
            "created_at": self.next_timestamp(),
        }
        self.rows("workspaces").append(row)
        return row


@pytest.fixture(autouse=True)
def _fresh_session_cache():
    clear_session_cache()
    yield
    clear_session_cache()


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def blob_store(fake_supabase):
    return SupabaseBlobStore(fake_supabase, settings.storage_bucket)


@pytest.fixture
def bucket_objects(fake_supabase):
    return fake_supabase.storage.objects.setdefault(settings.storage_bucket, {})


@pytest.fixture
def tokens(fake_supabase):
    return {
        "admin": fake_supabase.add_profile("admin-1", Role.ADMIN.value, full_name="Ada Admin"),
        "editor": fake_supabase.add_profile("editor-1", Role.EDITOR.value),
        "viewer": fake_supabase.add_profile("viewer-1", Role.VIEWER.value),
        "no_profile": fake_supabase.auth.add_user("ghost-1", "ghost@example.com"),
    }


@pytest.fixture
def client(fake_supabase, blob_store):
    from portal.main import app, limiter

    limiter.reset()
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    limiter.reset()


@pytest.fixture
def headers(tokens):
    return {role: {"Authorization": f"Bearer {token}"} for role, token in tokens.items()}
