import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import AccountType, Agent, Provider, Seller, User
from apps.inventory.models import Archive, CustomPrice, Plan, StockUnit


def client_for(user):
    """Return an API client authenticated as ``user``."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Accounts
# =============================================================================

@pytest.fixture
def provider(db):
    return Provider.objects.create(name='Main Provider', wallet_amount=10000)


@pytest.fixture
def other_provider(db):
    return Provider.objects.create(name='Other Provider', wallet_amount=10000)


@pytest.fixture
def agent(provider):
    return Agent.objects.create(name='Agent Smith', provider=provider)


@pytest.fixture
def seller(provider, agent):
    """Seller with 1000 in the wallet."""
    return Seller.objects.create(
        name='Corner Shop',
        provider=provider,
        agent=agent,
        wallet_amount=1000,
    )


@pytest.fixture
def other_seller(other_provider):
    return Seller.objects.create(
        name='Foreign Shop',
        provider=other_provider,
        wallet_amount=1000,
    )


@pytest.fixture
def seller_user(seller):
    return User.objects.create_user(
        username='seller1',
        password='SellerPass123!',
        account_type=AccountType.SELLER,
        provider=seller.provider,
        seller=seller,
    )


@pytest.fixture
def provider_user(provider):
    """Provider login holding every capability."""
    return User.objects.create_user(
        username='provider1',
        password='ProviderPass123!',
        account_type=AccountType.PROVIDER,
        provider=provider,
        capabilities=['superprovider'],
    )


@pytest.fixture
def limited_provider_user(provider):
    """Provider login without any capability."""
    return User.objects.create_user(
        username='provider2',
        password='ProviderPass123!',
        account_type=AccountType.PROVIDER,
        provider=provider,
        capabilities=[],
    )


@pytest.fixture
def admin_account(db):
    return User.objects.create_superuser(username='root', password='AdminPass123!')


@pytest.fixture
def seller_client(seller_user):
    return client_for(seller_user)


@pytest.fixture
def provider_client(provider_user):
    return client_for(provider_user)


@pytest.fixture
def limited_provider_client(limited_provider_user):
    return client_for(limited_provider_user)


@pytest.fixture
def admin_client_jwt(admin_account):
    return client_for(admin_account)


# =============================================================================
# Inventory
# =============================================================================

@pytest.fixture
def plan(db):
    return Plan.objects.create(title='Netflix 1 Month', image='https://cdn.example.com/netflix.png')


@pytest.fixture
def price(provider, plan):
    """Face price 700, seller pays 500."""
    return CustomPrice.objects.create(
        provider=provider,
        plan=plan,
        price=700,
        seller_price=500,
        company_price=400,
    )


@pytest.fixture
def archive(provider, plan):
    return Archive.objects.create(provider=provider, plan=plan, note='First batch')


@pytest.fixture
def make_units(archive):
    """Factory creating Ready stock units in ``archive``."""
    counter = {'n': 0}

    def _make(count=1, target=None):
        target = target or archive
        units = []
        for _ in range(count):
            counter['n'] += 1
            units.append(StockUnit.objects.create(
                code=f'CODE-{counter["n"]:04d}',
                serial=f'SN-{counter["n"]:04d}',
                provider=target.provider,
                plan=target.plan,
                archive=target,
            ))
        return units

    return _make


@pytest.fixture
def unit(make_units):
    """A single Ready unit."""
    return make_units(1)[0]
