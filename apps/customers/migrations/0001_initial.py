# Generated manually for customers app

import uuid
from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Customer',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(blank=True, max_length=200)),
                ('phone', models.CharField(max_length=20, unique=True)),
                ('balance', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'customers',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['phone'], name='customers_phone_idx'),
                    models.Index(fields=['created_at'], name='customers_created_at_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(balance__gte=0), name='customer_balance_non_negative'),
                ],
            },
        ),
    ]
