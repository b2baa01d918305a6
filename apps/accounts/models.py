from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
import uuid


class AccountType(models.TextChoices):
    ADMIN = 'ADMIN', 'Admin'
    PROVIDER = 'PROVIDER', 'Provider'
    AGENT = 'AGENT', 'Agent'
    SELLER = 'SELLER', 'Seller'


class Provider(models.Model):
    """Top tenant: owns prices, stock, agents and sellers."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=150)
    active = models.BooleanField(default=True)

    # Signed integer currency units
    wallet_amount = models.BigIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'providers'
        ordering = ['name']

    def __str__(self):
        return self.name


class Agent(models.Model):
    """Middle tier between a provider and its sellers."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=150)
    provider = models.ForeignKey(
        Provider,
        on_delete=models.PROTECT,
        related_name='agents'
    )
    active = models.BooleanField(default=True)
    wallet_amount = models.BigIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'agents'
        ordering = ['name']

    def __str__(self):
        return self.name


class Seller(models.Model):
    """
    Point-of-sale account that buys cards against its wallet.

    ``wallet_amount`` is credited only by wallet funding and debited only by
    settlement. ``hold_id``/``hold_at`` form the funding lock: at most one
    funding transaction may be in flight per seller.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=150)
    provider = models.ForeignKey(
        Provider,
        on_delete=models.PROTECT,
        related_name='sellers'
    )
    agent = models.ForeignKey(
        Agent,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='sellers'
    )
    active = models.BooleanField(default=True)

    # Balances
    wallet_amount = models.BigIntegerField(default=0)
    payment_amount = models.BigIntegerField(default=0)

    # Single active login device
    device = models.CharField(max_length=128, blank=True)

    # Funding lock
    hold_id = models.CharField(max_length=32, null=True, blank=True)
    hold_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'sellers'
        ordering = ['name']
        indexes = [
            models.Index(fields=['hold_id', 'hold_at'], name='sellers_funding_lock_idx'),
        ]

    def __str__(self):
        return self.name


class UserManager(BaseUserManager):
    """Custom user manager for username-based authentication."""

    def create_user(self, username, password=None, **extra_fields):
        if not username:
            raise ValueError('Username is required')

        user = self.model(username=username, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, username, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('account_type', AccountType.ADMIN)
        extra_fields.setdefault('capabilities', ['superadmin'])

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(username, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Login identity.

    Balances live on the linked Provider/Agent/Seller row, never here.
    ``capabilities`` is the pre-authorized capability set checked at the
    API boundary (e.g. ``hold_cards``, ``create_seller_wallet``).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = models.CharField(unique=True, max_length=150, db_index=True)
    display_name = models.CharField(max_length=100, blank=True)

    account_type = models.CharField(
        max_length=10,
        choices=AccountType.choices,
        default=AccountType.SELLER
    )
    capabilities = models.JSONField(default=list, blank=True)

    provider = models.ForeignKey(
        Provider,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='users'
    )
    agent = models.ForeignKey(
        Agent,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='users'
    )
    seller = models.ForeignKey(
        Seller,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='users'
    )

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'username'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['account_type'], name='users_account_type_idx'),
        ]

    def __str__(self):
        return self.username

    def get_display_name(self):
        """Return display name or username."""
        return self.display_name or self.username

    def has_capability(self, capability):
        """Superadmin/superprovider imply every capability."""
        granted = set(self.capabilities or [])
        if 'superadmin' in granted:
            return True
        if 'superprovider' in granted and self.account_type == AccountType.PROVIDER:
            return True
        return capability in granted
