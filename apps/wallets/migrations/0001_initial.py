import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='WalletTransaction',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('amount', models.PositiveBigIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('source', models.CharField(choices=[('PROVIDER', 'Provider'), ('ADMIN', 'Admin')], default='PROVIDER', max_length=10)),
                ('type', models.CharField(choices=[('DEPOSIT', 'Deposit'), ('REFUND', 'Refund')], default='DEPOSIT', max_length=10)),
                ('hold_id', models.CharField(db_index=True, max_length=32)),
                ('note', models.TextField(blank=True)),
                ('date', models.DateTimeField(default=django.utils.timezone.now)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('provider', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='wallet_transactions', to='accounts.provider')),
                ('seller', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='wallet_transactions', to='accounts.seller')),
            ],
            options={
                'db_table': 'wallet_transactions',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['provider', '-created_at'], name='wallet_tx_provider_idx'),
                    models.Index(fields=['seller', '-created_at'], name='wallet_tx_seller_idx'),
                ],
            },
        ),
    ]
