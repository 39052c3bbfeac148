from django.core.management.base import BaseCommand

from stories.models import Comment, Story
from stories.services import StoryCatalogService


class Command(BaseCommand):
    help = 'Заповнення бази прикладами історій та коментарів'

    def add_arguments(self, parser):
        parser.add_argument(
            '--flush', action='store_true',
            help='Видалити наявні історії та коментарі перед заповненням',
        )

    def handle(self, *args, **options):
        if options['flush']:
            Comment.objects.all().delete()
            Story.objects.all().delete()

        service = StoryCatalogService()

        stories_data = [
            {
                'title': 'Coffee at the Wrong Table',
                'author_name': 'Marta',
                'content': (
                    'I sat down at the wrong table in a crowded cafe and apologised three times. '
                    'He laughed, pushed his cup aside and said the chair had been waiting for me. '
                    'Eight years later we still argue about who spilled the coffee.'
                ),
                'comments': [
                    ('Oleh', 'This made my morning!'),
                    ('Ira', 'The chair was right.'),
                ],
            },
            {
                'title': 'Letters Across the River',
                'author_name': 'Taras',
                'content': (
                    'We lived on opposite banks and the bridge closed every winter. '
                    'So we wrote letters and traded them with the ferryman, who read every one of them '
                    'and gave us advice we never asked for.'
                ),
                'comments': [
                    ('Sofia', 'The ferryman deserves a story of his own.'),
                ],
            },
            {
                'title': 'Second Chances',
                'author_name': 'Lena',
                'content': (
                    'We met at nineteen and broke up at twenty. At forty we met again at a train station, '
                    'both late for different trains, and decided to miss them together.'
                ),
                'comments': [],
            },
        ]

        for data in stories_data:
            story = service.submit_story(data['title'], data['content'], data['author_name'])
            for name, text in data['comments']:
                service.submit_comment(story.id, name, text)

        self.stdout.write(self.style.SUCCESS(
            f'База даних успішно заповнена: історій {len(stories_data)}.'
        ))
