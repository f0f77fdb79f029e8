# Generated manually for recurring bill schedules

import uuid
from decimal import Decimal
from django.core.validators import MinValueValidator, RegexValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('groups', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='RecurringBill',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('amount', models.DecimalField(decimal_places=8, max_digits=20, validators=[MinValueValidator(Decimal('0.00000001'))])),
                ('currency', models.CharField(choices=[('USDC', 'USDC'), ('ETH', 'Ether'), ('MATIC', 'Matic')], default='USDC', max_length=10)),
                ('payee_address', models.CharField(max_length=42, validators=[RegexValidator(message='Must be a 0x-prefixed 40 hex character address.', regex='^0x[0-9a-fA-F]{40}$')])),
                ('frequency', models.CharField(choices=[('DAILY', 'Daily'), ('WEEKLY', 'Weekly'), ('BIWEEKLY', 'Every two weeks'), ('MONTHLY', 'Monthly'), ('QUARTERLY', 'Quarterly'), ('YEARLY', 'Yearly')], max_length=20)),
                ('start_date', models.DateTimeField()),
                ('next_due_date', models.DateTimeField()),
                ('end_date', models.DateTimeField(blank=True, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('auto_propose', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('group', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='recurring_bills', to='groups.group')),
            ],
            options={
                'db_table': 'recurring_bills',
                'ordering': ['next_due_date'],
                'indexes': [models.Index(fields=['is_active', 'next_due_date'], name='recurring_b_is_acti_5e7c12_idx')],
            },
        ),
    ]
