from django.core.management.base import BaseCommand
from django.db import transaction
from django.contrib.auth import get_user_model
from apps.users.models import Profile, Hobby, ProfileHobby
from faker import Faker
import random

User = get_user_model()
fake = Faker()


class Command(BaseCommand):
    help = 'Create fake users with located profiles for testing discovery'

    def add_arguments(self, parser):
        parser.add_argument(
            '--count',
            type=int,
            default=20,
            help='Number of fake users to create'
        )
        parser.add_argument('--lat', type=float, default=40.7128, help='Center latitude')
        parser.add_argument('--lng', type=float, default=-74.0060, help='Center longitude')
        parser.add_argument(
            '--spread',
            type=float,
            default=0.5,
            help='Max offset in degrees from the center'
        )

    def handle(self, *args, **options):
        count = options['count']
        spread = options['spread']

        hobbies = list(Hobby.objects.all())
        if not hobbies:
            self.stdout.write(self.style.WARNING('No hobbies found. Run create_hobbies first.'))
            return

        self.stdout.write(f'Creating {count} fake users...')

        created = 0
        for i in range(count):
            try:
                # User and profile are created together or not at all
                with transaction.atomic():
                    username = fake.user_name() + str(random.randint(1000, 9999))
                    user = User.objects.create_user(
                        email=f"{username}@example.com",
                        username=username,
                        password='testpassword123'
                    )

                    profile = Profile.objects.create(
                        user=user,
                        display_name=fake.first_name(),
                        age=random.randint(18, 60),
                        gender=random.choice([choice for choice, _ in Profile.GENDER_CHOICES]),
                        bio=fake.text(max_nb_chars=200),
                        location_lat=options['lat'] + random.uniform(-spread, spread),
                        location_lng=options['lng'] + random.uniform(-spread, spread),
                        radius_preference=random.choice([10, 25, 50, 100]),
                    )

                    ProfileHobby.objects.bulk_create([
                        ProfileHobby(profile=profile, hobby=hobby)
                        for hobby in random.sample(hobbies, k=min(len(hobbies), random.randint(3, 8)))
                    ])

                created += 1
                self.stdout.write(self.style.SUCCESS(f'✓ Created: {username}'))

            except Exception as e:
                self.stdout.write(self.style.ERROR(f'✗ Error: {str(e)}'))

        self.stdout.write(self.style.SUCCESS(f'\n✅ Successfully created {created} fake users'))
