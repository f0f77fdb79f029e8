# Generated manually for bills and bill items

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator, RegexValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('groups', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Bill',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('total_amount', models.DecimalField(decimal_places=8, max_digits=20, validators=[MinValueValidator(Decimal('0.00000001'))])),
                ('currency', models.CharField(choices=[('USDC', 'USDC'), ('ETH', 'Ether'), ('MATIC', 'Matic')], default='USDC', max_length=10)),
                ('due_date', models.DateTimeField(blank=True, null=True)),
                ('payee_address', models.CharField(max_length=42, validators=[RegexValidator(message='Must be a 0x-prefixed 40 hex character address.', regex='^0x[0-9a-fA-F]{40}$')])),
                ('status', models.CharField(choices=[('DRAFT', 'Draft'), ('PROPOSED', 'Proposed'), ('APPROVED', 'Approved'), ('REJECTED', 'Rejected'), ('PAID', 'Paid'), ('CANCELLED', 'Cancelled')], default='DRAFT', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='created_bills', to=settings.AUTH_USER_MODEL)),
                ('group', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='bills', to='groups.group')),
            ],
            options={
                'db_table': 'bills',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['group', 'status'], name='bills_group_i_7a3e21_idx'), models.Index(fields=['created_by', 'created_at'], name='bills_created_9f1b44_idx')],
            },
        ),
        migrations.CreateModel(
            name='BillItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('description', models.CharField(max_length=200)),
                ('amount', models.DecimalField(decimal_places=8, max_digits=20, validators=[MinValueValidator(Decimal('0'))])),
                ('quantity', models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])),
                ('position', models.PositiveSmallIntegerField(default=0)),
                ('bill', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='bills.bill')),
            ],
            options={
                'db_table': 'bill_items',
                'ordering': ['position'],
            },
        ),
    ]
