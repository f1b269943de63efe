import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('inventory', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='KaragirEntry',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('karagir_name', models.CharField(db_index=True, help_text='Stored lower-cased; the matching key for reconciliation.', max_length=150, verbose_name='karagir name')),
                ('metal_type', models.CharField(choices=[('gold', 'Gold'), ('silver', 'Silver'), ('others', 'Others')], max_length=10, verbose_name='metal type')),
                ('entry_type', models.CharField(choices=[('out', 'Out (material given)'), ('in', 'In (jewellery received)')], editable=False, max_length=3, verbose_name='entry type')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('completed', 'Completed')], default='pending', max_length=10, verbose_name='status')),
                ('transaction_id', models.UUIDField(default=uuid.uuid4, editable=False, unique=True, verbose_name='transaction ID')),
                ('remarks', models.TextField(blank=True, default='', verbose_name='remarks')),
                ('grams_given', models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True, verbose_name='grams given')),
                ('purity_given', models.CharField(blank=True, max_length=30, verbose_name='purity given')),
                ('jewellery_name', models.CharField(blank=True, max_length=200, verbose_name='jewellery name')),
                ('subtype', models.CharField(blank=True, max_length=60, verbose_name='subtype')),
                ('huid_no', models.CharField(blank=True, max_length=6, null=True, verbose_name='HUID number')),
                ('karat_carat', models.CharField(blank=True, max_length=30, verbose_name='karat / carat')),
                ('gross_weight', models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True, verbose_name='gross weight (g)')),
                ('net_weight', models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True, verbose_name='net weight (g)')),
                ('purity_received', models.CharField(blank=True, max_length=30, verbose_name='purity received')),
                ('labour_charge', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True, verbose_name='labour charge')),
                ('balance', models.CharField(blank=True, default='0', max_length=60, verbose_name='balance')),
                ('completes_out_entry', models.ForeignKey(blank=True, limit_choices_to={'entry_type': 'out'}, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='completed_by_entries', to='karagir.karagirentry', verbose_name='completes out entry')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='created by')),
                ('linked_item', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='karagir_entry', to='inventory.item', verbose_name='linked item')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='updated by')),
                ('vendor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='karagir_entries', to=settings.AUTH_USER_MODEL, verbose_name='vendor')),
            ],
            options={
                'verbose_name': 'karagir entry',
                'verbose_name_plural': 'karagir entries',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['vendor', 'karagir_name', 'metal_type', 'entry_type', 'status'], name='karagir_pending_match_idx'),
                    models.Index(fields=['vendor', 'created_at'], name='karagir_vendor_created_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('entry_type', 'out'), ('status', 'completed'), _connector='OR'), name='karagir_in_entry_completed'),
                    models.CheckConstraint(condition=models.Q(('grams_given__isnull', True), ('grams_given__gte', 0), _connector='OR'), name='karagir_grams_given_non_negative'),
                ],
            },
        ),
    ]
