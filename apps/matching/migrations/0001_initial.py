import django.db.models.deletion
import django.db.models.expressions
import django.utils.timezone
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='SwipeAction',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('uuid', models.UUIDField(db_index=True, default=uuid.uuid4, editable=False, unique=True)),
                ('direction', models.CharField(choices=[('like', 'Like'), ('pass', 'Pass')], max_length=10)),
                ('action_date', models.DateField(db_index=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('actor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='swipe_actions', to=settings.AUTH_USER_MODEL)),
                ('target', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='received_swipes', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'swipe_actions',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['actor', 'action_date'], name='swipe_actor_date_idx'),
                    models.Index(fields=['target', 'direction'], name='swipe_target_direction_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('actor', 'target'), name='unique_swipe_per_pair'),
                    models.CheckConstraint(condition=models.Q(('actor', django.db.models.expressions.F('target')), _negated=True), name='swipe_actor_not_target'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Match',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('uuid', models.UUIDField(db_index=True, default=uuid.uuid4, editable=False, unique=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('last_interaction_at', models.DateTimeField(blank=True, db_index=True, help_text='Updated on any conversation activity', null=True)),
                ('user1', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='matches_as_user1', to=settings.AUTH_USER_MODEL)),
                ('user2', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='matches_as_user2', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'matches',
                'ordering': ['-created_at'],
                'constraints': [
                    models.UniqueConstraint(fields=('user1', 'user2'), name='unique_match_per_pair'),
                    models.CheckConstraint(condition=models.Q(('user1__lt', django.db.models.expressions.F('user2'))), name='match_users_ordered'),
                ],
            },
        ),
    ]
