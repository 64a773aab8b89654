from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Doctor',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('email', models.EmailField(max_length=100, unique=True)),
                ('phone', models.CharField(blank=True, max_length=20)),
                ('crm', models.CharField(max_length=20, unique=True)),
                ('specialty', models.CharField(choices=[('ORTOPEDIA', 'Ortopedia'), ('CARDIOLOGIA', 'Cardiologia'), ('GINECOLOGIA', 'Ginecologia'), ('DERMATOLOGIA', 'Dermatologia')], max_length=20)),
                ('address_street', models.CharField(max_length=100)),
                ('address_district', models.CharField(max_length=100)),
                ('address_zip_code', models.CharField(max_length=9)),
                ('address_city', models.CharField(max_length=100)),
                ('address_state', models.CharField(blank=True, max_length=2)),
                ('address_number', models.CharField(blank=True, max_length=20)),
                ('address_complement', models.CharField(blank=True, max_length=100)),
                ('active', models.BooleanField(db_index=True, default=True)),
            ],
            options={
                'ordering': ['name', 'id'],
            },
        ),
    ]
