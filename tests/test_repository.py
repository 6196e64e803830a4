# tests/test_repository.py
import httpx
import pytest
from postgrest import APIError

from marketplace.errors import NotFoundError, TransportError, ValidationError
from marketplace.models.listing import Listing, ListingDraft

from conftest import make_row


def api_error(code, message='rejected'):
    return APIError({'message': message, 'code': code, 'hint': None, 'details': None})


@pytest.fixture
def draft():
    return ListingDraft(name='Volvo XC60', price=28000, engine='Diesel', engine_size=2.0,
                        mileage=90000, transmission='Manual', color='Black', year=2018,
                        description='Tow bar', images=['https://cdn.test/a.jpg'], location='Oslo')


async def test_fetch_all_returns_typed_listings(supabase, repository):
    supabase.tables['listings'] = [make_row(id='1'), make_row(id='2', name='Volvo XC60')]
    listings = await repository.fetch_all()
    assert [item.name for item in listings] == ['Tesla Model 3', 'Volvo XC60']
    assert all(isinstance(item, Listing) for item in listings)


async def test_fetch_all_empty_is_not_an_error(repository):
    assert await repository.fetch_all() == []


async def test_fetch_all_network_failure_is_transport_error(supabase, repository):
    supabase.errors['listings'] = httpx.ConnectError("connection refused")
    with pytest.raises(TransportError):
        await repository.fetch_all()


async def test_fetch_all_service_error_is_transport_error(supabase, repository):
    supabase.errors['listings'] = api_error('PGRST301', 'JWT expired')
    with pytest.raises(TransportError) as exc_info:
        await repository.fetch_all()
    assert 'JWT expired' in str(exc_info.value)


async def test_fetch_by_id(supabase, repository):
    supabase.tables['listings'] = [make_row(id='1'), make_row(id='2', name='Volvo XC60')]
    listing = await repository.fetch_by_id('2')
    assert listing.name == 'Volvo XC60'


async def test_fetch_by_id_missing_raises_not_found(supabase, repository):
    supabase.tables['listings'] = [make_row(id='1')]
    with pytest.raises(NotFoundError) as exc_info:
        await repository.fetch_by_id('nope')
    assert exc_info.value.record_id == 'nope'


async def test_create_returns_listing_with_store_id(supabase, repository, draft):
    listing = await repository.create(draft)
    assert listing.id == 'listings-1'
    assert listing.images == ['https://cdn.test/a.jpg']
    stored = supabase.tables['listings'][0]
    assert stored['engineSize'] == 2.0
    assert stored['name'] == 'Volvo XC60'


@pytest.mark.parametrize('code', ['23502', '22P02', 'PGRST204'])
async def test_create_shape_rejection_is_validation_error(supabase, repository, draft, code):
    supabase.errors[('listings', 'insert')] = api_error(code)
    with pytest.raises(ValidationError):
        await repository.create(draft)


async def test_create_network_failure_is_transport_error(supabase, repository, draft):
    supabase.errors[('listings', 'insert')] = httpx.ReadTimeout("timed out")
    with pytest.raises(TransportError):
        await repository.create(draft)


async def test_update_replaces_record(supabase, repository):
    supabase.tables['listings'] = [make_row(id='1'), make_row(id='2', name='Volvo XC60')]
    listing = await repository.fetch_by_id('1')
    updated = await repository.update(Listing.from_dict({**listing.to_dict(), 'price': 31000}))
    assert updated.price == 31000
    assert supabase.tables['listings'][0]['price'] == 31000
    assert supabase.tables['listings'][1]['name'] == 'Volvo XC60'


async def test_update_missing_id_returns_none(repository):
    ghost = Listing.from_dict(make_row(id='ghost'))
    assert await repository.update(ghost) is None


async def test_delete_by_id(supabase, repository):
    supabase.tables['listings'] = [make_row(id='1'), make_row(id='2')]
    await repository.delete_by_id('1')
    assert [row['id'] for row in supabase.tables['listings']] == ['2']


async def test_delete_missing_id_is_a_no_op(supabase, repository):
    supabase.tables['listings'] = [make_row(id='1')]
    await repository.delete_by_id('nope')
    assert len(supabase.tables['listings']) == 1


async def test_delete_network_failure_is_transport_error(supabase, repository):
    supabase.errors[('listings', 'delete')] = httpx.ConnectError("connection refused")
    with pytest.raises(TransportError):
        await repository.delete_by_id('1')


async def test_users(supabase, repository):
    supabase.tables['users'] = [
        {'id': 'a', 'email': 'admin@example.com', 'role': 'admin', 'created_at': '2024-12-19T16:00:09+00:00'},
        {'id': 'b', 'email': 'bob@example.com', 'role': 'user', 'created_at': None},
    ]
    users = await repository.fetch_users()
    assert [user.email for user in users] == ['admin@example.com', 'bob@example.com']
    assert (await repository.fetch_user_by_id('a')).is_admin
    assert await repository.fetch_user_by_id('zzz') is None

    await repository.delete_user('b')
    await repository.delete_user('b')
    assert [row['id'] for row in supabase.tables['users']] == ['a']


async def test_malformed_row_is_validation_error(supabase, repository):
    row = make_row()
    del row['name']
    supabase.tables['listings'] = [row]
    with pytest.raises(ValidationError):
        await repository.fetch_all()


async def test_user_with_trimmed_timestamp_fraction(supabase, repository):
    supabase.tables['users'] = [
        {'id': 'a', 'email': 'admin@example.com', 'role': 'admin',
         'created_at': '2024-12-19T16:00:09.12345+00:00'},
    ]
    user = await repository.fetch_user_by_id('a')
    assert user.created_at.microsecond == 123450
    assert len(await repository.fetch_users()) == 1


async def test_malformed_user_row_is_validation_error(supabase, repository):
    supabase.tables['users'] = [{'id': 'a', 'email': 'admin@example.com', 'created_at': 'yesterday'}]
    with pytest.raises(ValidationError):
        await repository.fetch_user_by_id('a')
    with pytest.raises(ValidationError):
        await repository.fetch_users()
