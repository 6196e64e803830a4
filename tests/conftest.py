# tests/conftest.py
import itertools
from types import SimpleNamespace

import pytest
from storage3.utils import StorageException

from marketplace.image_uploader import ImageFile, ImageUploader
from marketplace.repository import ListingRepository


class FakeQuery:
    """Just enough of the postgrest builder for the repository."""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = 'select'
        self.payload = None
        self.filters = []
        self.size = None

    def select(self, *columns):
        self.op = 'select'
        return self

    def insert(self, row):
        self.op = 'insert'
        self.payload = row
        return self

    def update(self, payload):
        self.op = 'update'
        self.payload = payload
        return self

    def delete(self):
        self.op = 'delete'
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def limit(self, size):
        self.size = size
        return self

    async def execute(self):
        self.db.log.append(f"{self.op}:{self.table}")
        error = self.db.errors.get((self.table, self.op)) or self.db.errors.get(self.table)
        if error is not None:
            raise error

        rows = self.db.tables.setdefault(self.table, [])
        matched = [row for row in rows if all(row.get(c) == v for c, v in self.filters)]

        if self.op == 'insert':
            row = dict(self.payload)
            row.setdefault('id', f"{self.table}-{next(self.db.ids)}")
            rows.append(row)
            data = [dict(row)]
        elif self.op == 'update':
            for row in matched:
                row.update(self.payload)
            data = [dict(row) for row in matched]
        elif self.op == 'delete':
            for row in matched:
                rows.remove(row)
            data = [dict(row) for row in matched]
        else:
            data = [dict(row) for row in matched]
            if self.size is not None:
                data = data[:self.size]
        return SimpleNamespace(data=data)


class FakeSupabase:
    def __init__(self, log):
        self.tables = {}
        self.errors = {}
        self.log = log
        self.ids = itertools.count(1)

    def table(self, name):
        return FakeQuery(self, name)


class FakeBucket:
    def __init__(self, storage, bucket):
        self.storage = storage
        self.bucket = bucket

    async def upload(self, path, content, options=None):
        self.storage.log.append(f"upload:{path.rsplit('-', 1)[-1]}")
        if any(path.endswith(f"-{name}") for name in self.storage.fail_on):
            raise StorageException("The resource already exists")
        self.storage.objects[path] = content

    async def get_public_url(self, path):
        return f"https://cdn.test/storage/v1/object/public/{self.bucket}/{path}"


class FakeStorage:
    def __init__(self, log):
        self.objects = {}
        self.fail_on = set()
        self.log = log

    def from_(self, bucket):
        return FakeBucket(self, bucket)


def make_row(**overrides):
    row = {
        'id': '1',
        'name': 'Tesla Model 3',
        'price': 35000,
        'engine': 'Electric',
        'engineSize': 0,
        'mileage': 5000,
        'transmission': 'Automatic',
        'color': 'Blue',
        'year': 2022,
        'description': 'One owner',
        'images': [],
        'location': 'Berlin',
    }
    row.update(overrides)
    return row


@pytest.fixture
def log():
    return []


@pytest.fixture
def supabase(log):
    return FakeSupabase(log)


@pytest.fixture
def storage(log):
    return FakeStorage(log)


@pytest.fixture
def repository(supabase):
    return ListingRepository(supabase)


@pytest.fixture
def uploader(storage):
    return ImageUploader(storage, bucket='listing-images')


@pytest.fixture
def images():
    return [ImageFile(name=f"car{i}.jpg", content=b"jpeg", content_type='image/jpeg') for i in (1, 2, 3)]


@pytest.fixture
def navigations():
    return []
