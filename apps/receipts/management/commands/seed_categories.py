from django.core.management.base import BaseCommand

from apps.receipts.infrastructure.persistence.repositories import CategoryRepository


class Command(BaseCommand):
    help = 'Create the default receipt categories that do not exist yet'

    def handle(self, **options):
        created = CategoryRepository.seed_defaults()

        if created:
            self.stdout.write(
                self.style.SUCCESS(f'Created {created} default categories')
            )
        else:
            self.stdout.write('Default categories already present')
