import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Item',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('jewellery_name', models.CharField(max_length=200, verbose_name='jewellery name')),
                ('metal_type', models.CharField(choices=[('gold', 'Gold'), ('silver', 'Silver'), ('others', 'Others')], db_index=True, max_length=10, verbose_name='metal type')),
                ('subtype', models.CharField(max_length=60, verbose_name='subtype')),
                ('gross_weight', models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True, verbose_name='gross weight (g)')),
                ('net_weight', models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True, verbose_name='net weight (g)')),
                ('purity', models.CharField(blank=True, max_length=30, verbose_name='purity')),
                ('labour_charge', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True, verbose_name='labour charge')),
                ('balance', models.CharField(blank=True, default='0', max_length=60, verbose_name='balance')),
                ('huid_no', models.CharField(blank=True, help_text='Gold only. Hallmark Unique ID, 6 alphanumeric characters.', max_length=6, null=True, verbose_name='HUID number')),
                ('karat_carat', models.CharField(blank=True, help_text='Silver and other metals only.', max_length=30, verbose_name='karat / carat')),
                ('source_type', models.CharField(choices=[('manual', 'Manual'), ('karagir', 'Karagir')], default='manual', max_length=10, verbose_name='source type')),
                ('is_active', models.BooleanField(default=True, help_text='Cleared when the item is sold to a customer.', verbose_name='active')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='created by')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='updated by')),
                ('vendor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to=settings.AUTH_USER_MODEL, verbose_name='vendor')),
            ],
            options={
                'verbose_name': 'item',
                'verbose_name_plural': 'items',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['vendor', 'metal_type'], name='item_vendor_metal_idx'),
                    models.Index(fields=['vendor', 'source_type'], name='item_vendor_source_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('metal_type', 'gold'), ('huid_no__isnull', False)), fields=('huid_no',), name='unique_gold_item_huid'),
                    models.CheckConstraint(condition=models.Q(('net_weight__isnull', True), ('gross_weight__isnull', True), ('net_weight__lte', models.F('gross_weight')), _connector='OR'), name='item_net_lte_gross_weight'),
                ],
            },
        ),
    ]
