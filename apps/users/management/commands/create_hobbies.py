from django.core.management.base import BaseCommand
from apps.users.models import Hobby

DEFAULT_HOBBIES = {
    'Sports & Fitness': [
        ('Running', 'Jogging and running for fitness'),
        ('Gym', 'Weight training and fitness'),
        ('Yoga', 'Yoga and meditation'),
        ('Cycling', 'Biking and cycling'),
        ('Swimming', 'Swimming and water activities'),
        ('Hiking', 'Trail hiking and nature walks'),
        ('Rock Climbing', 'Indoor and outdoor climbing'),
        ('Tennis', 'Tennis and racquet sports'),
        ('Soccer', 'Football and soccer'),
        ('Basketball', 'Basketball and team sports'),
    ],
    'Arts & Culture': [
        ('Photography', 'Photography and visual arts'),
        ('Painting', 'Painting and drawing'),
        ('Music', 'Playing instruments and music appreciation'),
        ('Concerts', 'Live music events and festivals'),
        ('Museums', 'Museums and art galleries'),
        ('Theater', 'Theater and live performances'),
        ('Dance', 'Dancing and dance classes'),
        ('Film', 'Movies and filmmaking'),
        ('Writing', 'Creative writing and literature'),
    ],
    'Food & Drink': [
        ('Cooking', 'Cooking and culinary arts'),
        ('Baking', 'Baking and pastry arts'),
        ('Wine', 'Wine tasting and collecting'),
        ('Craft Beer', 'Craft beer and brewing'),
        ('Coffee', 'Coffee culture and brewing'),
        ('BBQ', 'Barbecue and grilling'),
    ],
    'Travel & Adventure': [
        ('Travel', 'Travel and exploring new places'),
        ('Camping', 'Camping and outdoor adventures'),
        ('Road Trips', 'Road trips and driving adventures'),
        ('Beach', 'Beach activities and coastal living'),
        ('Mountains', 'Mountain activities and skiing'),
    ],
    'Technology & Gaming': [
        ('Gaming', 'Video games and gaming culture'),
        ('Board Games', 'Board games and tabletop gaming'),
        ('Coding', 'Programming and software development'),
    ],
    'Lifestyle & Social': [
        ('Reading', 'Books and reading'),
        ('Podcasts', 'Podcasts and audio content'),
        ('Volunteering', 'Community service and volunteering'),
        ('Pets', 'Pet ownership and animal care'),
        ('Gardening', 'Gardening and plants'),
        ('Fashion', 'Fashion and style'),
    ],
    'Wellness & Spirituality': [
        ('Meditation', 'Meditation and mindfulness'),
        ('Self-care', 'Self-care and personal wellness'),
    ],
}


class Command(BaseCommand):
    help = 'Create the default hobby taxonomy'

    def handle(self, *args, **kwargs):
        total = 0
        for category, hobbies in DEFAULT_HOBBIES.items():
            for name, description in hobbies:
                Hobby.objects.update_or_create(
                    name=name,
                    defaults={'category': category, 'description': description}
                )
                total += 1
            self.stdout.write(self.style.SUCCESS(f'Category "{category}": {len(hobbies)} hobbies.'))

        self.stdout.write(self.style.SUCCESS(f'\n {total} hobbies created or updated successfully.'))
