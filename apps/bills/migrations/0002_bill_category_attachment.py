# Generated manually for bill categories and attachments

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    dependencies = [
        ('bills', '0001_initial'),
        ('budgets', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='bill',
            name='category',
            field=models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='bills', to='budgets.budgetcategory'),
        ),
        migrations.AddField(
            model_name='bill',
            name='attachment_url',
            field=models.URLField(blank=True, max_length=500),
        ),
    ]
