import django.core.validators
import django.db.models.deletion
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Plan',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('image', models.URLField(blank=True)),
                ('active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'plans',
                'ordering': ['title'],
            },
        ),
        migrations.CreateModel(
            name='Archive',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('active', models.BooleanField(default=True)),
                ('note', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('plan', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='archives', to='inventory.plan')),
                ('provider', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='archives', to='accounts.provider')),
            ],
            options={
                'db_table': 'archives',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='CustomPrice',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('price', models.BigIntegerField(validators=[django.core.validators.MinValueValidator(0)])),
                ('seller_price', models.BigIntegerField(validators=[django.core.validators.MinValueValidator(0)])),
                ('company_price', models.BigIntegerField(default=0, validators=[django.core.validators.MinValueValidator(0)])),
                ('active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('plan', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='custom_prices', to='inventory.plan')),
                ('provider', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='custom_prices', to='accounts.provider')),
            ],
            options={
                'db_table': 'custom_prices',
                'constraints': [models.UniqueConstraint(condition=models.Q(('active', True)), fields=('provider', 'plan'), name='unique_active_price_per_provider_plan')],
            },
        ),
        migrations.CreateModel(
            name='StockUnit',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('code', models.CharField(max_length=255)),
                ('serial', models.CharField(blank=True, max_length=255)),
                ('status', models.CharField(choices=[('Ready', 'Ready'), ('Hold', 'Hold'), ('Sold', 'Sold')], default='Ready', max_length=5)),
                ('hold_id', models.CharField(blank=True, max_length=32, null=True)),
                ('hold_at', models.DateTimeField(blank=True, null=True)),
                ('sold_at', models.DateTimeField(blank=True, null=True)),
                ('active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('archive', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='stock_units', to='inventory.archive')),
                ('plan', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='stock_units', to='inventory.plan')),
                ('provider', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='stock_units', to='accounts.provider')),
                ('seller', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='stock_units', to='accounts.seller')),
            ],
            options={
                'db_table': 'stock_units',
                'indexes': [
                    models.Index(fields=['plan', 'status', 'active'], name='stock_available_idx'),
                    models.Index(fields=['hold_id'], name='stock_hold_id_idx'),
                    models.Index(fields=['status', 'hold_at'], name='stock_hold_expiry_idx'),
                ],
            },
        ),
    ]
