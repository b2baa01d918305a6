import django.core.validators
import django.db.models.deletion
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
        ('inventory', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Payment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('price', models.BigIntegerField()),
                ('seller_price', models.BigIntegerField()),
                ('company_price', models.BigIntegerField(default=0)),
                ('qty', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('total_cost', models.BigIntegerField()),
                ('note', models.TextField(blank=True)),
                ('hold_id', models.CharField(db_index=True, max_length=32)),
                ('items', models.JSONField(default=list)),
                ('local_card', models.JSONField(default=dict)),
                ('activated_by', models.JSONField(blank=True, null=True)),
                ('activated_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('agent', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='payments', to='accounts.agent')),
                ('custom_price', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='payments', to='inventory.customprice')),
                ('plan', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='payments', to='inventory.plan')),
                ('provider', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='payments', to='accounts.provider')),
                ('seller', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='payments', to='accounts.seller')),
            ],
            options={
                'db_table': 'payments',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['seller', '-created_at'], name='payments_seller_idx'),
                    models.Index(fields=['provider', '-created_at'], name='payments_provider_idx'),
                ],
            },
        ),
    ]
