# Generated manually for budget categories

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
            name='BudgetCategory',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('color', models.CharField(blank=True, max_length=7, validators=[RegexValidator(message='Must be a hex color such as #1A2B3C.', regex='^#[0-9a-fA-F]{6}$')])),
                ('icon', models.CharField(blank=True, max_length=50)),
                ('monthly_limit', models.DecimalField(blank=True, decimal_places=8, max_digits=20, null=True, validators=[MinValueValidator(Decimal('0'))])),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('group', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='budget_categories', to='groups.group')),
            ],
            options={
                'db_table': 'budget_categories',
                'ordering': ['-created_at'],
                'verbose_name_plural': 'budget categories',
                'indexes': [models.Index(fields=['group', 'is_active'], name='budget_cate_group_i_2c8d4f_idx')],
            },
        ),
    ]
